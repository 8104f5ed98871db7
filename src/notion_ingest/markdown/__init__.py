"""Markdown rendering of Notion block trees and pages."""

from notion_ingest.markdown.frontmatter import render_frontmatter, render_page
from notion_ingest.markdown.renderer import format_rich_text, render_blocks, render_rich_text

__all__ = [
    "format_rich_text",
    "render_blocks",
    "render_frontmatter",
    "render_page",
    "render_rich_text",
]
