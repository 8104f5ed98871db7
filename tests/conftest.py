"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from notion_ingest.app import app
from notion_ingest.config import get_settings
from notion_ingest.notion.client import reset_client


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _fresh_state():
    """Drop cached settings and the Notion client between tests."""
    get_settings.cache_clear()
    reset_client()
    yield
    get_settings.cache_clear()
    reset_client()
