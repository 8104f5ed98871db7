"""Consumer callback protocol shared by the query stream and the crawler.

Producers hand each (page, error) pair to a consumer and stop issuing
requests as soon as it returns False. Consumers may be plain functions or
coroutine functions.
"""

import inspect
from collections.abc import Awaitable, Callable

from notion_ingest.models.page import Page
from notion_ingest.notion.errors import NotionIngestError

PageConsumer = Callable[[Page | None, NotionIngestError | None], bool | Awaitable[bool]]


async def deliver(
    consumer: PageConsumer,
    page: Page | None,
    error: NotionIngestError | None = None,
) -> bool:
    """Hand one item to the consumer and return True to continue, False to stop."""
    result = consumer(page, error)
    if inspect.isawaitable(result):
        result = await result
    return bool(result)
