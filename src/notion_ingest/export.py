"""Export runs: drive a query or crawl and render every delivered page.

Collects rendered pages and error messages for one run. Per-page failures
are logged and recorded without interrupting the run; an optional
max_pages cap stops the producer early.
"""

import logging
from datetime import datetime, timedelta, timezone

from notion_ingest.config import get_settings
from notion_ingest.markdown import render_page
from notion_ingest.models.export import ExportResult, RenderedPage
from notion_ingest.models.page import Page
from notion_ingest.notion.crawler import crawl_updated_pages
from notion_ingest.notion.errors import NotionIngestError
from notion_ingest.notion.query import query_updated_pages

logger = logging.getLogger(__name__)


def default_since(days: int | None = None) -> datetime:
    """Return now minus ``days`` (default: settings.export_lookback_days), in UTC."""
    if days is None:
        days = get_settings().export_lookback_days
    return datetime.now(timezone.utc) - timedelta(days=days)


class _Collector:
    """Consumer that renders pages into an ExportResult."""

    def __init__(self, max_pages: int | None = None) -> None:
        self.max_pages = max_pages
        self.result = ExportResult()

    def __call__(self, page: Page | None, error: NotionIngestError | None) -> bool:
        if error is not None:
            logger.warning("Skipping page after error", extra={"error": str(error)})
            self.result.errors.append(str(error))
            return True

        self.result.pages.append(
            RenderedPage(
                page_id=page.id,
                url=page.url,
                last_edited_time=page.last_edited_time,
                markdown=render_page(page),
            )
        )
        if self.max_pages is not None and len(self.result.pages) >= self.max_pages:
            self.result.stopped = True
            return False
        return True


async def export_database(
    database_id: str,
    since: datetime,
    max_pages: int | None = None,
) -> ExportResult:
    """Render every page of a database edited at or after ``since``."""
    collector = _Collector(max_pages)
    await query_updated_pages(database_id, since, collector)
    logger.info(
        "Database export finished",
        extra={
            "database_id": database_id,
            "pages": len(collector.result.pages),
            "errors": len(collector.result.errors),
            "stopped": collector.result.stopped,
        },
    )
    return collector.result


async def export_page_tree(
    page_id: str,
    since: datetime,
    recursive: bool = True,
    max_depth: int = 0,
    max_pages: int | None = None,
) -> ExportResult:
    """Render a page and (optionally) its descendants edited at or after ``since``."""
    collector = _Collector(max_pages)
    await crawl_updated_pages(page_id, since, collector, recursive=recursive, max_depth=max_depth)
    logger.info(
        "Page export finished",
        extra={
            "page_id": page_id,
            "pages": len(collector.result.pages),
            "errors": len(collector.result.errors),
            "stopped": collector.result.stopped,
        },
    )
    return collector.result
