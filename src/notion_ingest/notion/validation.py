"""Validate database and page references before they are used as sources.

Never raises: every failure is reported on the returned result so the
caller can show it to a user as-is.
"""

import logging

from notion_ingest.config import get_settings
from notion_ingest.notion.errors import InvalidNotionIDError, NotionAPIError
from notion_ingest.notion.ids import parse_notion_id
from notion_ingest.notion.models import SourceValidationResult
from notion_ingest.notion.pages import get_database_metadata, get_page_metadata

logger = logging.getLogger(__name__)

_NOT_CONFIGURED = "Notion service is not configured"


async def validate_database_source(reference: str) -> SourceValidationResult:
    """Check that a database ID or URL points at a readable database."""
    try:
        database_id = parse_notion_id(reference)
    except InvalidNotionIDError:
        return SourceValidationResult(valid=False, error_message="invalid database ID or URL")

    if not get_settings().notion_api_key:
        return SourceValidationResult(valid=False, id=database_id, error_message=_NOT_CONFIGURED)

    try:
        metadata = await get_database_metadata(database_id)
    except NotionAPIError as exc:
        logger.warning("Database validation failed", extra={"database_id": database_id, "error": str(exc)})
        return SourceValidationResult(
            valid=False, id=database_id, error_message=f"failed to get database: {exc}"
        )

    return SourceValidationResult(valid=True, id=database_id, title=metadata.title, url=metadata.url)


async def validate_page_source(reference: str) -> SourceValidationResult:
    """Check that a page ID or URL points at a readable page."""
    try:
        page_id = parse_notion_id(reference)
    except InvalidNotionIDError:
        return SourceValidationResult(valid=False, error_message="invalid page ID or URL")

    if not get_settings().notion_api_key:
        return SourceValidationResult(valid=False, id=page_id, error_message=_NOT_CONFIGURED)

    try:
        metadata = await get_page_metadata(page_id)
    except NotionAPIError as exc:
        logger.warning("Page validation failed", extra={"page_id": page_id, "error": str(exc)})
        return SourceValidationResult(
            valid=False, id=page_id, error_message=f"failed to get page: {exc}"
        )

    return SourceValidationResult(valid=True, id=page_id, title=metadata.title, url=metadata.url)
