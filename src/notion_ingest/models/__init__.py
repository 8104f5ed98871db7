"""Data models for Notion pages, blocks and metadata."""

from notion_ingest.models.block import (
    Annotations,
    Block,
    BlockContent,
    BlockType,
    CodeContent,
    RichText,
    TextContent,
    ToDoContent,
)
from notion_ingest.models.export import (
    DatabaseExportRequest,
    ExportResult,
    PageExportRequest,
    RenderedPage,
)
from notion_ingest.models.page import DatabaseMetadata, Page, PageMetadata

__all__ = [
    "Annotations",
    "Block",
    "BlockContent",
    "BlockType",
    "CodeContent",
    "DatabaseExportRequest",
    "DatabaseMetadata",
    "ExportResult",
    "Page",
    "PageExportRequest",
    "PageMetadata",
    "RenderedPage",
    "RichText",
    "TextContent",
    "ToDoContent",
]
