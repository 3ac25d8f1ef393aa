"""
tests/conftest.py
──────────────────
Shared pytest fixtures for the backend test suite.

Fixtures
--------
mock_fetcher
    ``MagicMock`` standing in for :class:`YFinanceFetcher`, so tests never
    hit Yahoo Finance.  Configure return values / side effects per test.

app_client
    ``httpx.AsyncClient`` wired to the FastAPI app with the fetcher
    dependency overridden by ``mock_fetcher``.

sync_client
    Synchronous ``TestClient`` with the same override.

Usage
-----
    async def test_health(app_client):
        resp = await app_client.get("/")
        assert resp.status_code == 200
"""

from typing import AsyncGenerator, Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from app.main import app
from market_data.fetcher import YFinanceFetcher, get_fetcher


# ── Mock fetcher ──────────────────────────────────────────────────────────────


@pytest.fixture
def mock_fetcher() -> MagicMock:
    """
    Return a MagicMock shaped like ``YFinanceFetcher``.

    Defaults return empty payloads; override in individual tests:

        def test_something(mock_fetcher):
            mock_fetcher.fetch_quote.return_value = {"symbol": "PETR4.SA"}
    """
    fetcher = MagicMock(spec=YFinanceFetcher)
    fetcher.fetch_quote.return_value = {}
    fetcher.fetch_chart.return_value = {"meta": {}, "quotes": [], "events": {}}
    fetcher.search.return_value = {"quotes": [], "news": []}
    fetcher.fetch_summary.return_value = {}
    fetcher.fetch_historical.return_value = []
    return fetcher


# ── Test clients ──────────────────────────────────────────────────────────────


@pytest.fixture
async def app_client(mock_fetcher: MagicMock) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTPX client with the fetcher dependency overridden by ``mock_fetcher``.

    Startup lifespan is skipped so yfinance is never configured or called.
    """
    app.dependency_overrides[get_fetcher] = lambda: mock_fetcher

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sync_client(mock_fetcher: MagicMock) -> Generator[TestClient, None, None]:
    """
    Synchronous ``TestClient`` for simpler, non-async tests.

    Uses the same ``mock_fetcher`` override as ``app_client``.
    """
    app.dependency_overrides[get_fetcher] = lambda: mock_fetcher
    client = TestClient(app, raise_server_exceptions=True)
    yield client
    app.dependency_overrides.clear()
