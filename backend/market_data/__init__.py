"""
market_data: Yahoo Finance access for the HTTP layer.

Public API
----------
    from market_data import MarketCoordinator, YFinanceFetcher, get_fetcher
"""

from market_data.coordinator import MarketCoordinator
from market_data.fetcher import YFinanceFetcher, get_fetcher

__all__ = ["MarketCoordinator", "YFinanceFetcher", "get_fetcher"]
