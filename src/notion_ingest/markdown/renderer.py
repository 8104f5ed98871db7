"""Deterministic Markdown rendering of a block tree.

render_blocks is pure: the same tree always yields byte-identical output.
Indent level and the numbered-list counter are threaded through the
recursion explicitly; nothing is kept between calls.

Numbering: a numbered_list_item is 1 when its previous sibling is not a
numbered item, otherwise the previous ordinal + 1. Children of numbered,
bulleted and toggle blocks start a fresh counter; children of any other
block share the counter of their parent's sibling run.
"""

from notion_ingest.models.block import (
    Block,
    BlockType,
    CodeContent,
    RichText,
    ToDoContent,
)

_INDENT = "  "

_HEADING_PREFIXES = {
    BlockType.HEADING_1: "# ",
    BlockType.HEADING_2: "## ",
    BlockType.HEADING_3: "### ",
}

_FRESH_SCOPE_PARENTS = frozenset({BlockType.NUMBERED_LIST_ITEM, BlockType.BULLETED_LIST_ITEM})


class _NumberingScope:
    """Counter of the current run of consecutive numbered items."""

    __slots__ = ("counter",)

    def __init__(self) -> None:
        self.counter = 0


def format_rich_text(run: RichText) -> str:
    """Apply bold, italic, code, strikethrough (in that order), then the link."""
    text = run.plain_text
    annotations = run.annotations
    if annotations.bold:
        text = f"**{text}**"
    if annotations.italic:
        text = f"*{text}*"
    if annotations.code:
        text = f"`{text}`"
    if annotations.strikethrough:
        text = f"~~{text}~~"
    if run.href:
        text = f"[{text}]({run.href})"
    return text


def render_rich_text(runs: list[RichText]) -> str:
    return "".join(format_rich_text(run) for run in runs)


def _text(block: Block) -> str:
    content = block.content
    if content is None:
        return ""
    return render_rich_text(getattr(content, "rich_text", None) or [])


def _emit(out: list[str], pad: str, text: str) -> None:
    for line in text.split("\n"):
        out.append(f"{pad}{line}\n")


def _render(blocks: list[Block], indent: int, scope: _NumberingScope, out: list[str]) -> None:
    pad = _INDENT * indent

    for i, block in enumerate(blocks):
        previous = blocks[i - 1].type if i > 0 else None
        if previous is BlockType.NUMBERED_LIST_ITEM and block.type is not BlockType.NUMBERED_LIST_ITEM:
            scope.counter = 0

        block_type = block.type
        if block_type is BlockType.PARAGRAPH:
            text = _text(block)
            if text:
                _emit(out, pad, text)

        elif block_type in _HEADING_PREFIXES:
            _emit(out, pad, _HEADING_PREFIXES[block_type] + _text(block))

        elif block_type is BlockType.BULLETED_LIST_ITEM:
            _emit(out, pad, "- " + _text(block))

        elif block_type is BlockType.NUMBERED_LIST_ITEM:
            if previous is BlockType.NUMBERED_LIST_ITEM:
                scope.counter += 1
            else:
                scope.counter = 1
            _emit(out, pad, f"{scope.counter}. {_text(block)}")

        elif block_type is BlockType.CODE:
            if isinstance(block.content, CodeContent):
                out.append(f"{pad}```{block.content.language}\n")
                _emit(out, pad, render_rich_text(block.content.rich_text))
                out.append(f"{pad}```\n")

        elif block_type in (BlockType.QUOTE, BlockType.CALLOUT):
            _emit(out, pad, "> " + _text(block))

        elif block_type is BlockType.DIVIDER:
            out.append(f"{pad}---\n")

        elif block_type is BlockType.TO_DO:
            if isinstance(block.content, ToDoContent):
                box = "- [x] " if block.content.checked else "- [ ] "
                _emit(out, pad, box + render_rich_text(block.content.rich_text))

        elif block_type is BlockType.TOGGLE:
            out.append(f"{pad}<details><summary>{_text(block)}</summary>\n")
            if block.children:
                _render(block.children, indent + 1, _NumberingScope(), out)
            out.append(f"{pad}</details>\n")
            continue  # children already rendered inside <details>

        else:
            # child_page and unknown types: text if any, children below
            text = _text(block)
            if text:
                _emit(out, pad, text)

        if block.children:
            child_scope = _NumberingScope() if block_type in _FRESH_SCOPE_PARENTS else scope
            _render(block.children, indent + 1, child_scope, out)


def render_blocks(blocks: list[Block]) -> str:
    """Render a block tree as Markdown. Never raises; empty input gives ""."""
    out: list[str] = []
    _render(blocks, 0, _NumberingScope(), out)
    return "".join(out)
