"""Notion ID parsing from raw IDs, dashed UUIDs or notion.so URLs."""

import re
from urllib.parse import urlparse

from notion_ingest.notion.errors import InvalidNotionIDError

_HEX_ID = re.compile(r"^[0-9a-f]{32}$")
_NOTION_HOSTS = {"notion.so", "www.notion.so"}


def _from_url(raw: str) -> str:
    parsed = urlparse(raw)
    if parsed.hostname not in _NOTION_HOSTS:
        raise InvalidNotionIDError("invalid Notion ID", value=raw)

    # The ID is the trailing 32 hex chars of the last path segment,
    # e.g. /workspace/Title-abc123def4567890abc123def4567890
    last_segment = parsed.path.rstrip("/").split("/")[-1]
    clean = last_segment.replace("-", "").lower()
    if len(clean) >= 32 and _HEX_ID.match(clean[-32:]):
        return clean[-32:]
    raise InvalidNotionIDError("invalid Notion ID", value=raw)


def parse_notion_id(value: str) -> str:
    """Return the canonical 8-4-4-4-12 UUID for a Notion ID or URL.

    Accepts "abc123...", "12345678-90ab-cdef-1234-567890abcdef" and
    "https://www.notion.so/workspace/Title-abc123...?v=...".
    Raises InvalidNotionIDError for anything else.
    """
    raw = (value or "").strip()
    if not raw:
        raise InvalidNotionIDError("invalid Notion ID", value=value)

    if raw.startswith(("http://", "https://")):
        hex_id = _from_url(raw)
    else:
        hex_id = raw.replace("-", "").lower()
        if not _HEX_ID.match(hex_id):
            raise InvalidNotionIDError("invalid Notion ID", value=value)

    return f"{hex_id[0:8]}-{hex_id[8:12]}-{hex_id[12:16]}-{hex_id[16:20]}-{hex_id[20:32]}"
