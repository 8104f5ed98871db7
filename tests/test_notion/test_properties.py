"""Tests for property value text extraction."""

from notion_ingest.notion.properties import extract_title, plain_text, property_to_text


def test_title_and_rich_text():
    """Title and rich text render as concatenated plain text."""
    assert property_to_text({"type": "title", "title": [{"plain_text": "A"}, {"plain_text": "B"}]}) == "AB"
    assert property_to_text({"type": "rich_text", "rich_text": [{"plain_text": "desc"}]}) == "desc"


def test_select_and_status():
    """Select and status render as their option name."""
    assert property_to_text({"type": "select", "select": {"name": "High"}}) == "High"
    assert property_to_text({"type": "status", "status": {"name": "In Progress"}}) == "In Progress"


def test_unset_select_is_none():
    """An empty select is skipped."""
    assert property_to_text({"type": "select", "select": None}) is None


def test_multi_select_comma_joined():
    """Multi-select names are joined with a comma and space."""
    prop = {"type": "multi_select", "multi_select": [{"name": "tag1"}, {"name": "tag2"}]}
    assert property_to_text(prop) == "tag1, tag2"


def test_number_checkbox_url():
    """Numbers keep their literal value; checkboxes are true/false."""
    assert property_to_text({"type": "number", "number": 42}) == "42"
    assert property_to_text({"type": "number", "number": 2.5}) == "2.5"
    assert property_to_text({"type": "number", "number": None}) is None
    assert property_to_text({"type": "checkbox", "checkbox": True}) == "true"
    assert property_to_text({"type": "checkbox", "checkbox": False}) == "false"
    assert property_to_text({"type": "url", "url": "https://example.com"}) == "https://example.com"


def test_date_start_and_range():
    """Dates render their start, or start → end for ranges."""
    assert property_to_text({"type": "date", "date": {"start": "2026-01-01", "end": None}}) == "2026-01-01"
    assert (
        property_to_text({"type": "date", "date": {"start": "2026-01-01", "end": "2026-01-03"}})
        == "2026-01-01 → 2026-01-03"
    )


def test_unrecognized_types_are_none():
    """People, relations, formulas and garbage are not rendered."""
    assert property_to_text({"type": "people", "people": [{"id": "u1"}]}) is None
    assert property_to_text({"type": "relation", "relation": []}) is None
    assert property_to_text("not a property") is None


def test_extract_title():
    """The title-typed property is found regardless of its name."""
    props = {
        "Tags": {"type": "multi_select", "multi_select": []},
        "Case": {"type": "title", "title": [{"plain_text": "Incident 42"}]},
    }
    assert extract_title(props) == "Incident 42"
    assert extract_title({}) == ""


def test_plain_text_none():
    assert plain_text(None) == ""
