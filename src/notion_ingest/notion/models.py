"""Result types for Notion source validation.

Separate from the domain models since these are returned to HTTP callers
rather than flowing through the ingestion core.
"""

from pydantic import BaseModel


class SourceValidationResult(BaseModel):
    """Outcome of validating a database or page reference."""

    valid: bool
    id: str | None = None  # canonical UUID when the reference parsed
    title: str = ""
    url: str = ""
    error_message: str = ""
