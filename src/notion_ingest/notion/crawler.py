"""Depth-limited crawl over child-page links, delivering recently edited pages.

Starting at a root page, every page edited at or after ``since`` is
resolved and delivered to the consumer. When ``recursive`` is set, the
direct child_page blocks of each visited page are followed, up to
``max_depth`` levels below the root (0 = unlimited).

Failures never end the crawl on their own: they are delivered to the
consumer, which decides whether to continue. A failed child-page scan
still visits the children found before the failure. There is no
deduplication; a page linked from two parents is delivered twice.
"""

import logging
from datetime import datetime

from notion_ingest.notion.api import PAGE_SIZE, list_block_children, retrieve_page
from notion_ingest.notion.consumer import PageConsumer, deliver
from notion_ingest.notion.errors import ChildPageScanError, NotionAPIError, PageResolutionError
from notion_ingest.notion.pages import as_utc, parse_timestamp, resolve_page

logger = logging.getLogger(__name__)


async def collect_child_page_ids(page_id: str) -> list[str]:
    """Return the IDs of child_page blocks directly under ``page_id``.

    Single-level scan: child pages nested inside other blocks are not found.
    Raises ChildPageScanError carrying the IDs collected so far.
    """
    ids: list[str] = []
    cursor: str | None = None

    while True:
        try:
            response = await list_block_children(page_id, start_cursor=cursor, page_size=PAGE_SIZE)
        except NotionAPIError as exc:
            raise ChildPageScanError(
                "failed to collect child page IDs", collected=ids, page_id=page_id
            ) from exc

        for record in response.get("results", []):
            if record.get("type") == "child_page":
                ids.append(record["id"])

        cursor = response.get("next_cursor")
        if not response.get("has_more") or not cursor:
            break

    return ids


class _Crawl:
    """State of one crawl invocation: its parameters and the consumer."""

    def __init__(
        self,
        since: datetime,
        consumer: PageConsumer,
        recursive: bool,
        max_depth: int,
    ) -> None:
        self.since = as_utc(since)
        self.consumer = consumer
        self.recursive = recursive
        self.max_depth = max_depth
        self.delivered = 0

    async def visit(self, page_id: str, depth: int) -> bool:
        """Visit one page and, if allowed, its child pages. False means stop."""
        try:
            record = await retrieve_page(page_id)
        except NotionAPIError as exc:
            logger.warning("Failed to get page", extra={"page_id": page_id, "error": str(exc)})
            return await deliver(self.consumer, None, exc)

        if parse_timestamp(record.get("last_edited_time")) >= self.since:
            try:
                page = await resolve_page(record)
            except PageResolutionError as exc:
                logger.warning("Failed to resolve page", extra={"page_id": page_id, "error": str(exc)})
                return await deliver(self.consumer, None, exc)
            self.delivered += 1
            if not await deliver(self.consumer, page):
                return False

        if not self.recursive:
            return True
        if self.max_depth > 0 and depth >= self.max_depth:
            return True

        try:
            child_ids = await collect_child_page_ids(page_id)
        except ChildPageScanError as exc:
            logger.warning(
                "Child page scan failed, continuing with partial list",
                extra={"page_id": page_id, "collected": len(exc.collected), "error": str(exc)},
            )
            if not await deliver(self.consumer, None, exc):
                return False
            child_ids = exc.collected

        logger.debug(
            "Visiting child pages",
            extra={"page_id": page_id, "depth": depth, "children": len(child_ids)},
        )
        for child_id in child_ids:
            if not await self.visit(child_id, depth + 1):
                return False
        return True


async def crawl_updated_pages(
    page_id: str,
    since: datetime,
    consumer: PageConsumer,
    recursive: bool = True,
    max_depth: int = 0,
) -> None:
    """Deliver the root page and its descendants edited at or after ``since``.

    Pages are visited depth-first in API order. Returns as soon as the
    consumer returns False, without issuing any further request.
    """
    logger.info(
        "Crawling updated pages",
        extra={
            "page_id": page_id,
            "since": since.isoformat(),
            "recursive": recursive,
            "max_depth": max_depth,
        },
    )
    crawl = _Crawl(since, consumer, recursive, max_depth)
    completed = await crawl.visit(page_id, 0)
    logger.info(
        "Crawl completed" if completed else "Crawl stopped by consumer",
        extra={"page_id": page_id, "pages": crawl.delivered},
    )
