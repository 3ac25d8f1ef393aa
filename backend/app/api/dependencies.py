"""
app/api/dependencies.py
───────────────────────
FastAPI dependency functions shared across all endpoints.

Usage
-----
    from app.api.dependencies import get_coordinator

    @router.get("/foo")
    async def my_route(coordinator = Depends(get_coordinator)):
        ...

Tests replace :func:`get_fetcher` through ``app.dependency_overrides`` so
no request ever reaches Yahoo Finance.
"""

from concurrent.futures import ThreadPoolExecutor
from functools import lru_cache

from fastapi import Depends

from core.config import Settings, get_settings
from market_data.coordinator import MarketCoordinator
from market_data.fetcher import YFinanceFetcher, get_fetcher


@lru_cache(maxsize=1)
def get_executor() -> ThreadPoolExecutor:
    """Thread pool shared by every request for blocking yfinance calls."""
    return ThreadPoolExecutor(
        max_workers=get_settings().UPSTREAM_MAX_WORKERS,
        thread_name_prefix="yfinance",
    )


def get_coordinator(
    fetcher: YFinanceFetcher = Depends(get_fetcher),
    settings: Settings = Depends(get_settings),
) -> MarketCoordinator:
    """
    FastAPI dependency that builds a coordinator around the fetcher singleton.

    Inject via ``Depends(get_coordinator)`` in any route handler.
    """
    return MarketCoordinator(
        fetcher, executor=get_executor(), timeout=settings.upstream_timeout
    )
