"""Page and metadata models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from notion_ingest.models.block import Block


class Page(BaseModel):
    """A Notion page with its properties and fully resolved block tree."""

    id: str
    properties: dict[str, Any] = Field(default_factory=dict)  # raw Notion property values
    blocks: list[Block] = Field(default_factory=list)
    created_time: datetime
    last_edited_time: datetime
    url: str = ""


class DatabaseMetadata(BaseModel):
    """Display descriptor for a Notion database."""

    id: str
    title: str
    url: str


class PageMetadata(BaseModel):
    """Display descriptor for a Notion page."""

    id: str
    title: str
    url: str
