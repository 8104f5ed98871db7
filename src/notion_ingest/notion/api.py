"""Thin async wrappers over the Notion endpoints used by the ingestion core.

Each wrapper retries rate-limited responses transparently (tenacity) and
wraps every other transport or API failure into NotionAPIError carrying the
ID it was called with. Callers never see notion_client or httpx exceptions.
"""

import logging
from collections.abc import Awaitable, Callable

import httpx
from notion_client import errors as notion_errors
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from notion_ingest.config import get_settings
from notion_ingest.notion.client import get_notion_client
from notion_ingest.notion.errors import NotionAPIError

logger = logging.getLogger(__name__)

PAGE_SIZE = 100  # Notion's maximum page size

_API_ERRORS = (
    notion_errors.HTTPResponseError,
    notion_errors.RequestTimeoutError,
    httpx.HTTPError,
)

_retry_wait = wait_exponential_jitter(initial=1, max=30, jitter=2)


def _is_rate_limited(error: BaseException) -> bool:
    """Only HTTP 429 / rate_limited responses are retried."""
    return (
        isinstance(error, notion_errors.APIResponseError)
        and error.code == notion_errors.APIErrorCode.RateLimited
    )


async def _request(endpoint: Callable[..., Awaitable[dict]], **kwargs) -> dict:
    """Call an SDK endpoint, retrying up to notion_max_retries times on rate limits."""
    retrying = AsyncRetrying(
        retry=retry_if_exception(_is_rate_limited),
        wait=_retry_wait,
        stop=stop_after_attempt(get_settings().notion_max_retries + 1),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    return await retrying(endpoint, **kwargs)


def _pagination(start_cursor: str | None, page_size: int) -> dict:
    kwargs: dict = {"page_size": page_size}
    if start_cursor:
        kwargs["start_cursor"] = start_cursor
    return kwargs


async def retrieve_database(database_id: str) -> dict:
    """Fetch a raw database object."""
    client = await get_notion_client()
    try:
        return await _request(client.databases.retrieve, database_id=database_id)
    except _API_ERRORS as exc:
        raise NotionAPIError("failed to get database", database_id=database_id) from exc


async def resolve_data_source_id(database_id: str) -> str:
    """Return the first data source ID of a database (Notion API 2025-09-03).

    Resolved on every call; nothing is cached.
    """
    db = await retrieve_database(database_id)
    data_sources = db.get("data_sources", [])
    if not data_sources:
        raise NotionAPIError("no data sources found for database", database_id=database_id)
    return data_sources[0]["id"]


async def query_data_source(
    data_source_id: str,
    query_filter: dict,
    start_cursor: str | None = None,
    page_size: int = PAGE_SIZE,
) -> dict:
    """Run one page of a filtered data source query."""
    client = await get_notion_client()
    try:
        return await _request(
            client.data_sources.query,
            data_source_id=data_source_id,
            filter=query_filter,
            **_pagination(start_cursor, page_size),
        )
    except _API_ERRORS as exc:
        raise NotionAPIError(
            "failed to query data source",
            data_source_id=data_source_id,
            start_cursor=start_cursor,
        ) from exc


async def list_block_children(
    block_id: str,
    start_cursor: str | None = None,
    page_size: int = PAGE_SIZE,
) -> dict:
    """Fetch one page of a block's (or page's) direct children."""
    client = await get_notion_client()
    try:
        return await _request(
            client.blocks.children.list,
            block_id=block_id,
            **_pagination(start_cursor, page_size),
        )
    except _API_ERRORS as exc:
        raise NotionAPIError("failed to get block children", block_id=block_id) from exc


async def retrieve_page(page_id: str) -> dict:
    """Fetch a raw page object (properties and timestamps, no content)."""
    client = await get_notion_client()
    try:
        return await _request(client.pages.retrieve, page_id=page_id)
    except _API_ERRORS as exc:
        raise NotionAPIError("failed to get page", page_id=page_id) from exc
