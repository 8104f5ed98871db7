"""Tests for the time-filtered database query stream."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

from notion_ingest.models.page import Page
from notion_ingest.notion.errors import NotionAPIError, PageResolutionError
from notion_ingest.notion.query import build_since_filter, query_updated_pages

_SINCE = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _row(page_id: str) -> dict:
    return {"object": "page", "id": page_id, "last_edited_time": "2026-01-05T00:00:00.000Z"}


def _page(record: dict) -> Page:
    return Page(
        id=record["id"],
        created_time="2026-01-01T00:00:00Z",
        last_edited_time=record["last_edited_time"],
    )


def _query_pages(*pages: list[dict]):
    """Fake query_data_source returning the given result pages in order."""

    def query(data_source_id, query_filter, start_cursor=None, page_size=100):
        index = int(start_cursor) if start_cursor else 0
        has_more = index + 1 < len(pages)
        return {
            "results": pages[index],
            "has_more": has_more,
            "next_cursor": str(index + 1) if has_more else None,
        }

    return query


class _Recorder:
    """Consumer recording deliveries; stops once ``stop_after`` items arrived."""

    def __init__(self, stop_after: int | None = None):
        self.items: list[tuple] = []
        self.stop_after = stop_after

    def __call__(self, page, error):
        self.items.append((page, error))
        return self.stop_after is None or len(self.items) < self.stop_after

    @property
    def page_ids(self) -> list[str]:
        return [page.id for page, _ in self.items if page is not None]

    @property
    def errors(self) -> list:
        return [error for _, error in self.items if error is not None]


def test_build_since_filter():
    """The filter selects last_edited_time on or after since."""
    assert build_since_filter(_SINCE) == {
        "timestamp": "last_edited_time",
        "last_edited_time": {"on_or_after": "2026-01-01T00:00:00+00:00"},
    }


def test_build_since_filter_naive_is_utc():
    """Naive datetimes are treated as UTC."""
    query_filter = build_since_filter(datetime(2026, 1, 1))
    assert query_filter["last_edited_time"]["on_or_after"] == "2026-01-01T00:00:00+00:00"


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_delivers_all_pages_in_order(mock_ds, mock_query, mock_resolve):
    """Rows across result pages are resolved and delivered in API order."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = _query_pages([_row("p1"), _row("p2")], [_row("p3")])
    mock_resolve.side_effect = _page
    consumer = _Recorder()

    await query_updated_pages("db-1", _SINCE, consumer)

    assert consumer.page_ids == ["p1", "p2", "p3"]
    assert consumer.errors == []
    assert mock_query.call_count == 2
    first, second = mock_query.call_args_list
    assert first.args[0] == "ds-1"
    assert first.args[1] == build_since_filter(_SINCE)
    assert first.kwargs["start_cursor"] is None
    assert second.kwargs["start_cursor"] == "1"
    assert first.kwargs["page_size"] == 100


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_resolution_failure_continues(mock_ds, mock_query, mock_resolve):
    """A page that fails to resolve is delivered as an error; the stream goes on."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = _query_pages([_row("p1"), _row("bad"), _row("p3")])

    def resolve(record):
        if record["id"] == "bad":
            raise PageResolutionError("failed to fetch page blocks", page_id="bad")
        return _page(record)

    mock_resolve.side_effect = resolve
    consumer = _Recorder()

    await query_updated_pages("db-1", _SINCE, consumer)

    assert consumer.page_ids == ["p1", "p3"]
    assert len(consumer.errors) == 1
    assert consumer.items[1][0] is None
    assert consumer.errors[0].context == {"page_id": "bad"}


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_stop_issues_no_further_requests(mock_ds, mock_query, mock_resolve):
    """Once the consumer stops, no more pages are resolved and no cursor is followed."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = _query_pages([_row("p1"), _row("p2")], [_row("p3")])
    mock_resolve.side_effect = _page
    consumer = _Recorder(stop_after=1)

    await query_updated_pages("db-1", _SINCE, consumer)

    assert consumer.page_ids == ["p1"]
    assert mock_resolve.call_count == 1
    assert mock_query.call_count == 1


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_stop_on_error(mock_ds, mock_query, mock_resolve):
    """Stopping on an error delivery also halts the stream."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = _query_pages([_row("bad"), _row("p2")])
    mock_resolve.side_effect = PageResolutionError("failed to fetch page blocks", page_id="bad")
    consumer = _Recorder(stop_after=1)

    await query_updated_pages("db-1", _SINCE, consumer)

    assert len(consumer.items) == 1
    assert mock_resolve.call_count == 1


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_request_failure_ends_stream(mock_ds, mock_query, mock_resolve):
    """A failed query page is delivered once, with context, and ends the stream."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = NotionAPIError("failed to query data source", data_source_id="ds-1")
    consumer = _Recorder()

    await query_updated_pages("db-1", _SINCE, consumer)

    assert len(consumer.items) == 1
    error = consumer.errors[0]
    assert isinstance(error, NotionAPIError)
    assert error.context["database_id"] == "db-1"
    assert error.context["since"] == _SINCE
    assert isinstance(error.__cause__, NotionAPIError)
    mock_resolve.assert_not_called()


@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_data_source_discovery_failure(mock_ds, mock_query):
    """If the database cannot be read, one error is delivered and nothing is queried."""
    mock_ds.side_effect = NotionAPIError("failed to get database", database_id="db-1")
    consumer = _Recorder()

    await query_updated_pages("db-1", _SINCE, consumer)

    assert len(consumer.errors) == 1
    mock_query.assert_not_called()


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_accepts_async_consumer(mock_ds, mock_query, mock_resolve):
    """Coroutine consumers are awaited and their decision honored."""
    mock_ds.return_value = "ds-1"
    mock_query.side_effect = _query_pages([_row("p1"), _row("p2")])
    mock_resolve.side_effect = _page
    seen = []

    async def consumer(page, error):
        seen.append(page.id)
        return False

    await query_updated_pages("db-1", _SINCE, consumer)

    assert seen == ["p1"]


@patch("notion_ingest.notion.query.resolve_page", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.query_data_source", new_callable=AsyncMock)
@patch("notion_ingest.notion.query.resolve_data_source_id", new_callable=AsyncMock)
async def test_query_empty_database(mock_ds, mock_query, mock_resolve):
    """No matching rows means no deliveries."""
    mock_ds.return_value = "ds-1"
    mock_query.return_value = {"results": [], "has_more": False, "next_cursor": None}
    consumer = _Recorder()

    await query_updated_pages("db-1", _SINCE, consumer)

    assert consumer.items == []
    mock_resolve.assert_not_called()
