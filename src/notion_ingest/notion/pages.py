"""Page detail resolution and lightweight metadata lookups."""

import logging
from datetime import datetime, timezone

from notion_ingest.models.page import DatabaseMetadata, Page, PageMetadata
from notion_ingest.notion.api import retrieve_database, retrieve_page
from notion_ingest.notion.blocks import fetch_block_tree
from notion_ingest.notion.errors import NotionAPIError, PageResolutionError
from notion_ingest.notion.properties import extract_title, normalize_properties, plain_text

logger = logging.getLogger(__name__)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with Notion timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str | None) -> datetime:
    """Parse a Notion ISO-8601 timestamp ("2024-01-01T00:00:00.000Z")."""
    if not value:
        return datetime.min.replace(tzinfo=timezone.utc)
    return as_utc(datetime.fromisoformat(value))


async def resolve_page(record: dict) -> Page:
    """Build a Page from a raw page record, fetching its full block tree.

    Raises PageResolutionError if any block request fails; no partial page
    is returned.
    """
    page_id = record["id"]
    try:
        blocks = await fetch_block_tree(page_id)
    except NotionAPIError as exc:
        raise PageResolutionError("failed to fetch page blocks", page_id=page_id) from exc

    logger.debug("Resolved page", extra={"page_id": page_id, "blocks": len(blocks)})
    return Page(
        id=page_id,
        properties=normalize_properties(record.get("properties")),
        blocks=blocks,
        created_time=parse_timestamp(record.get("created_time")),
        last_edited_time=parse_timestamp(record.get("last_edited_time")),
        url=record.get("url") or "",
    )


async def get_database_metadata(database_id: str) -> DatabaseMetadata:
    """Return the title and URL of a database."""
    db = await retrieve_database(database_id)
    return DatabaseMetadata(
        id=db.get("id", database_id),
        title=plain_text(db.get("title")),
        url=db.get("url") or "",
    )


async def get_page_metadata(page_id: str) -> PageMetadata:
    """Return the title and URL of a page."""
    page = await retrieve_page(page_id)
    return PageMetadata(
        id=page.get("id", page_id),
        title=extract_title(page.get("properties") or {}),
        url=page.get("url") or "",
    )
