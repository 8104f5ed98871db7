"""Pure functions reading Notion property values.

Property values stay opaque on Page.properties; these helpers turn the
recognized types into plain strings for frontmatter and titles.
"""

from typing import Any


def plain_text(rich_text: list[dict] | None) -> str:
    """Concatenate the plain_text of a raw rich text array."""
    return "".join(run.get("plain_text", "") for run in rich_text or [])


def _option_name(option: dict | None) -> str | None:
    if not option:
        return None
    return option.get("name")


def _format_date(date: dict | None) -> str | None:
    if not date or not date.get("start"):
        return None
    if date.get("end"):
        return f"{date['start']} → {date['end']}"
    return date["start"]


def property_to_text(prop: Any) -> str | None:
    """Render a raw property value as text, or None if unset/unrecognized.

    Recognized types: title, rich_text, select, status, multi_select,
    number, checkbox, url, email, phone_number, date.
    """
    if not isinstance(prop, dict):
        return None

    prop_type = prop.get("type")
    value = prop.get(prop_type) if prop_type else None

    if prop_type in ("title", "rich_text"):
        return plain_text(value)
    if prop_type in ("select", "status"):
        return _option_name(value)
    if prop_type == "multi_select":
        return ", ".join(opt.get("name", "") for opt in value or [])
    if prop_type == "number":
        return None if value is None else str(value)
    if prop_type == "checkbox":
        return "true" if value else "false"
    if prop_type in ("url", "email", "phone_number"):
        return value or None
    if prop_type == "date":
        return _format_date(value)
    return None


def normalize_properties(raw: dict | None) -> dict[str, Any]:
    """Copy a raw page's properties into a fresh mapping keyed by property name."""
    return dict(raw or {})


def extract_title(properties: dict[str, Any]) -> str:
    """Return the text of the title-typed property, or "" if there is none."""
    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            return plain_text(prop.get("title"))
    return ""
