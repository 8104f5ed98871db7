"""Page rendering with a `key: value` frontmatter block of its properties."""

from notion_ingest.markdown.renderer import render_blocks
from notion_ingest.models.page import Page
from notion_ingest.notion.properties import property_to_text

_SEPARATOR = "---\n"


def render_frontmatter(properties: dict) -> str:
    """Render recognized properties as `name: value` lines, sorted by name.

    Returns "" when no property renders.
    """
    lines = []
    for name in sorted(properties):
        value = property_to_text(properties[name])
        if not value:
            continue
        value = " ".join(value.splitlines())
        lines.append(f"{name}: {value}\n")
    if not lines:
        return ""
    return _SEPARATOR + "".join(lines) + _SEPARATOR + "\n"


def render_page(page: Page) -> str:
    """Render a page as frontmatter (when any property renders) plus its body."""
    return render_frontmatter(page.properties) + render_blocks(page.blocks)
