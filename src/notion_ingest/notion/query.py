"""Time-filtered, cursor-paginated database query delivering resolved pages.

Each result row is resolved into a full Page (block tree included) before
the next row is touched. A row that fails to resolve is delivered as an
error and the stream moves on; a failed query request ends the stream.
"""

import logging
from datetime import datetime

from notion_ingest.notion.api import PAGE_SIZE, query_data_source, resolve_data_source_id
from notion_ingest.notion.consumer import PageConsumer, deliver
from notion_ingest.notion.errors import NotionAPIError, PageResolutionError
from notion_ingest.notion.pages import as_utc, resolve_page

logger = logging.getLogger(__name__)


def _query_error(database_id: str, since: datetime, cause: Exception) -> NotionAPIError:
    error = NotionAPIError("failed to query database", database_id=database_id, since=since)
    error.__cause__ = cause
    return error


def build_since_filter(since: datetime) -> dict:
    """Filter matching pages with last_edited_time >= since."""
    return {
        "timestamp": "last_edited_time",
        "last_edited_time": {"on_or_after": as_utc(since).isoformat()},
    }


async def query_updated_pages(
    database_id: str,
    since: datetime,
    consumer: PageConsumer,
) -> None:
    """Deliver every page of a database edited at or after ``since``.

    Pages arrive in API order. Returns as soon as the consumer returns False,
    without issuing any further request.
    """
    logger.info(
        "Querying updated pages",
        extra={"database_id": database_id, "since": since.isoformat()},
    )

    try:
        data_source_id = await resolve_data_source_id(database_id)
    except NotionAPIError as exc:
        await deliver(consumer, None, _query_error(database_id, since, exc))
        return

    query_filter = build_since_filter(since)
    cursor: str | None = None
    delivered = 0

    while True:
        try:
            response = await query_data_source(
                data_source_id, query_filter, start_cursor=cursor, page_size=PAGE_SIZE
            )
        except NotionAPIError as exc:
            await deliver(consumer, None, _query_error(database_id, since, exc))
            return

        for record in response.get("results", []):
            try:
                page = await resolve_page(record)
            except PageResolutionError as exc:
                logger.warning(
                    "Failed to resolve page",
                    extra={"database_id": database_id, "page_id": record.get("id"), "error": str(exc)},
                )
                if not await deliver(consumer, None, exc):
                    return
                continue

            delivered += 1
            if not await deliver(consumer, page):
                logger.info(
                    "Query stopped by consumer",
                    extra={"database_id": database_id, "pages": delivered},
                )
                return

        cursor = response.get("next_cursor")
        if not response.get("has_more") or not cursor:
            break

    logger.info("Query completed", extra={"database_id": database_id, "pages": delivered})
