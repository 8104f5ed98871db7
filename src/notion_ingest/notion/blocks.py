"""Block conversion and recursive block tree retrieval.

convert_block is a pure mapping from a raw Notion block record to the
Block model. fetch_block_tree walks a page's (or block's) children page by
page and recurses into every child that reports has_children, so the
returned tree is complete regardless of depth.
"""

import logging

from notion_ingest.models.block import (
    Block,
    BlockContent,
    BlockType,
    CodeContent,
    RichText,
    TextContent,
    ToDoContent,
)
from notion_ingest.notion.api import PAGE_SIZE, list_block_children
from notion_ingest.notion.errors import NotionAPIError

logger = logging.getLogger(__name__)

_TEXT_TYPES = frozenset(
    {
        BlockType.PARAGRAPH,
        BlockType.HEADING_1,
        BlockType.HEADING_2,
        BlockType.HEADING_3,
        BlockType.BULLETED_LIST_ITEM,
        BlockType.NUMBERED_LIST_ITEM,
        BlockType.QUOTE,
        BlockType.CALLOUT,
        BlockType.TOGGLE,
    }
)


def _rich_text(payload: dict) -> list[RichText]:
    return [RichText.model_validate(run) for run in payload.get("rich_text") or []]


def _convert_content(block_type: BlockType, payload: dict) -> BlockContent | None:
    if block_type in _TEXT_TYPES:
        return TextContent(rich_text=_rich_text(payload))
    if block_type is BlockType.CODE:
        return CodeContent(rich_text=_rich_text(payload), language=payload.get("language") or "")
    if block_type is BlockType.TO_DO:
        return ToDoContent(rich_text=_rich_text(payload), checked=bool(payload.get("checked")))
    # divider, child_page and unknown types carry no renderable payload
    return None


def convert_block(record: dict) -> Block:
    """Map one raw Notion block record to a Block. Children are left empty."""
    raw_type = record.get("type")
    block_type = BlockType.from_api(raw_type)
    payload = (record.get(raw_type) if raw_type else None) or {}
    return Block(
        id=record.get("id", ""),
        type=block_type,
        content=_convert_content(block_type, payload),
    )


async def fetch_block_tree(block_id: str) -> list[Block]:
    """Return all children of a block or page, with nested children populated.

    Requests are strictly sequential. Any failed request aborts the whole
    subtree and raises NotionAPIError.
    """
    blocks: list[Block] = []
    cursor: str | None = None

    while True:
        response = await list_block_children(block_id, start_cursor=cursor, page_size=PAGE_SIZE)
        results = response.get("results", [])
        logger.debug("Fetched block children", extra={"block_id": block_id, "count": len(results)})

        for record in results:
            block = convert_block(record)
            if record.get("has_children"):
                try:
                    block.children = await fetch_block_tree(block.id)
                except NotionAPIError as exc:
                    raise NotionAPIError(
                        "failed to fetch children blocks",
                        block_id=block.id,
                        block_type=record.get("type"),
                    ) from exc
            blocks.append(block)

        cursor = response.get("next_cursor")
        if not response.get("has_more") or not cursor:
            break

    return blocks
