"""Exception types raised by the Notion ingestion core.

Every error carries the identifiers of the operation that failed (page,
block or database ID) as keyword context, rendered into ``str(error)``.
Callers chain the underlying cause with ``raise ... from exc``.
"""

from typing import Any


class NotionIngestError(Exception):
    """Base class for all ingestion errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        text = self.message
        if self.context:
            pairs = ", ".join(f"{k}={v}" for k, v in self.context.items())
            text = f"{text} ({pairs})"
        if self.__cause__ is not None:
            text = f"{text}: {self.__cause__}"
        return text


class NotionAPIError(NotionIngestError):
    """A Notion API request failed (after any rate-limit retries)."""


class PageResolutionError(NotionIngestError):
    """A page's block tree could not be fetched."""


class ChildPageScanError(NotionIngestError):
    """Scanning a page for child pages failed part-way.

    ``collected`` holds the child page IDs found before the failure.
    """

    def __init__(self, message: str, collected: list[str] | None = None, **context: Any) -> None:
        super().__init__(message, **context)
        self.collected = list(collected or [])


class InvalidNotionIDError(NotionIngestError, ValueError):
    """The input is neither a Notion ID nor a notion.so URL."""
