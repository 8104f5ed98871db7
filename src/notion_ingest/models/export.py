"""Export request and result models used by the HTTP API."""

from datetime import datetime

from pydantic import BaseModel, Field


class DatabaseExportRequest(BaseModel):
    """Body of POST /export/database."""

    database_id: str  # raw ID, UUID or notion.so URL
    since: datetime | None = None  # defaults to now - export_lookback_days
    max_pages: int | None = Field(default=None, ge=1)


class PageExportRequest(BaseModel):
    """Body of POST /export/page."""

    page_id: str
    since: datetime | None = None
    recursive: bool | None = None  # defaults to settings.crawl_recursive
    max_depth: int | None = Field(default=None, ge=0)  # 0 = unlimited
    max_pages: int | None = Field(default=None, ge=1)


class RenderedPage(BaseModel):
    """One exported page rendered as Markdown (frontmatter + body)."""

    page_id: str
    url: str
    last_edited_time: datetime
    markdown: str


class ExportResult(BaseModel):
    """Pages rendered during one export run and the errors met along the way."""

    pages: list[RenderedPage] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    stopped: bool = False  # True when max_pages cut the run short
