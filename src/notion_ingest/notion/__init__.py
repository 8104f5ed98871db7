"""Notion input: block trees, time-filtered queries and page-graph crawls."""

from notion_ingest.notion.blocks import convert_block, fetch_block_tree
from notion_ingest.notion.client import get_notion_client, reset_client
from notion_ingest.notion.consumer import PageConsumer
from notion_ingest.notion.crawler import collect_child_page_ids, crawl_updated_pages
from notion_ingest.notion.errors import (
    ChildPageScanError,
    InvalidNotionIDError,
    NotionAPIError,
    NotionIngestError,
    PageResolutionError,
)
from notion_ingest.notion.ids import parse_notion_id
from notion_ingest.notion.models import SourceValidationResult
from notion_ingest.notion.pages import get_database_metadata, get_page_metadata, resolve_page
from notion_ingest.notion.query import query_updated_pages
from notion_ingest.notion.validation import validate_database_source, validate_page_source

__all__ = [
    "ChildPageScanError",
    "collect_child_page_ids",
    "convert_block",
    "crawl_updated_pages",
    "fetch_block_tree",
    "get_database_metadata",
    "get_notion_client",
    "get_page_metadata",
    "InvalidNotionIDError",
    "NotionAPIError",
    "NotionIngestError",
    "PageConsumer",
    "PageResolutionError",
    "parse_notion_id",
    "query_updated_pages",
    "reset_client",
    "resolve_page",
    "SourceValidationResult",
    "validate_database_source",
    "validate_page_source",
]
