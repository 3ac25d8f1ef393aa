"""
market_data/fetcher.py
──────────────────────
Thin wrapper around ``yfinance``, the ONLY place in the codebase that
calls Yahoo Finance directly.

Every method is blocking and returns JSON-safe Python data.  Failures
propagate as exceptions; :class:`~market_data.coordinator.MarketCoordinator`
is responsible for turning them into error envelopes.

The fetcher is a process-wide singleton obtained via :func:`get_fetcher`.
Creating it also performs the one-time yfinance configuration.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Sequence

import pandas as pd
import yfinance as yf

from core.config import get_settings
from market_data.serialization import frame_to_records, statement_history, to_jsonable

logger = logging.getLogger(__name__)

# history() column → key in the chart ``quotes`` list.
_CHART_COLUMNS = {
    "Open": "open",
    "High": "high",
    "Low": "low",
    "Close": "close",
    "Volume": "volume",
    "Adj Close": "adjclose",
}

# history() column → key in the historical-series rows.
_HISTORICAL_COLUMNS = {
    "Open": "open",
    "High": "high",
    "Low": "low",
    "Close": "close",
    "Adj Close": "adjClose",
    "Volume": "volume",
}

# Keys of the flat ``info`` dict that belong to each quoteSummary module.
_INFO_MODULE_KEYS: Dict[str, Sequence[str]] = {
    "summaryDetail": (
        "previousClose", "open", "dayLow", "dayHigh", "regularMarketPreviousClose",
        "regularMarketOpen", "regularMarketDayLow", "regularMarketDayHigh",
        "dividendRate", "dividendYield", "exDividendDate", "payoutRatio",
        "fiveYearAvgDividendYield", "beta", "trailingPE", "forwardPE", "volume",
        "regularMarketVolume", "averageVolume", "averageVolume10days",
        "averageDailyVolume10Day", "bid", "ask", "bidSize", "askSize",
        "marketCap", "fiftyTwoWeekLow", "fiftyTwoWeekHigh", "priceToSalesTrailing12Months",
        "fiftyDayAverage", "twoHundredDayAverage", "trailingAnnualDividendRate",
        "trailingAnnualDividendYield", "currency", "fromCurrency", "toCurrency",
        "lastMarket", "algorithm", "tradeable",
    ),
    "summaryProfile": (
        "address1", "address2", "city", "state", "zip", "country", "phone", "fax",
        "website", "industry", "industryKey", "industryDisp", "sector", "sectorKey",
        "sectorDisp", "longBusinessSummary", "fullTimeEmployees", "companyOfficers",
        "irWebsite",
    ),
    "financialData": (
        "currentPrice", "targetHighPrice", "targetLowPrice", "targetMeanPrice",
        "targetMedianPrice", "recommendationMean", "recommendationKey",
        "numberOfAnalystOpinions", "totalCash", "totalCashPerShare", "ebitda",
        "totalDebt", "quickRatio", "currentRatio", "totalRevenue", "debtToEquity",
        "revenuePerShare", "returnOnAssets", "returnOnEquity", "grossProfits",
        "freeCashflow", "operatingCashflow", "earningsGrowth", "revenueGrowth",
        "grossMargins", "ebitdaMargins", "operatingMargins", "profitMargins",
        "financialCurrency",
    ),
}

_STATEMENT_MODULES = ("incomeStatementHistory", "cashflowStatementHistory")


def configure_upstream_client(log_level: str) -> None:
    """
    One-time yfinance setup.

    - Make yfinance raise on failure instead of logging and returning
      empty frames, so callers see every upstream error.
    - Cap the ``yfinance`` logger so provider notices stay out of the
      service log.
    """
    yf.config.debug.hide_exceptions = False
    logging.getLogger("yfinance").setLevel(log_level)
    logger.info("yfinance %s configured (log level cap=%s)", yf.__version__, log_level)


class YFinanceFetcher:
    """
    Fetch quotes, price series, search results and summaries from Yahoo
    Finance.

    Example:
        >>> fetcher = get_fetcher()
        >>> fetcher.fetch_quote("PETR4.SA")["currency"]
        'BRL'
    """

    # ── public API ────────────────────────────────────────────────────────

    def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        """
        Return the full quote for ``symbol``.

        Raises:
            ValueError: Yahoo returned no quote for the symbol.
        """
        info = yf.Ticker(symbol).get_info()
        if not info or not ("symbol" in info or "quoteType" in info):
            raise ValueError(f"No quote data returned for '{symbol}'")
        return to_jsonable(info)

    def fetch_chart(
        self, symbol: str, interval: str, start: int, end: int
    ) -> Dict[str, Any]:
        """
        Return the price chart for ``symbol`` between two Unix timestamps.

        Args:
            symbol:   Ticker (e.g. ``"PETR4.SA"``).
            interval: yfinance interval (``"1d"``, ``"1wk"``, ``"1mo"``, ...).
            start:    Inclusive start, Unix seconds.
            end:      Exclusive end, Unix seconds.

        Returns:
            ``{"meta": ..., "quotes": [...], "events": {"dividends": [...],
            "splits": [...]}}``.
        """
        ticker = yf.Ticker(symbol)
        df = ticker.history(
            interval=interval, start=start, end=end, auto_adjust=False, actions=True
        )
        meta = ticker.get_history_metadata()
        logger.debug("Chart for %s (%s): %d rows", symbol, interval, len(df))
        return {
            "meta": to_jsonable(meta or {}),
            "quotes": frame_to_records(df, _CHART_COLUMNS),
            "events": {
                "dividends": _events(df, "Dividends", "amount"),
                "splits": _events(df, "Stock Splits", "splitRatio"),
            },
        }

    def search(self, term: str) -> Dict[str, Any]:
        """Return Yahoo's raw search response for ``term`` (quotes, news, ...)."""
        return to_jsonable(yf.Search(term).response)

    def fetch_summary(self, symbol: str, modules: Sequence[str]) -> Dict[str, Any]:
        """
        Return the requested quoteSummary modules for ``symbol``.

        Supported modules: ``summaryDetail``, ``summaryProfile``,
        ``financialData``, ``incomeStatementHistory`` and
        ``cashflowStatementHistory``.

        Raises:
            ValueError: An unsupported module name was requested.
        """
        unknown = [m for m in modules if m not in _INFO_MODULE_KEYS and m not in _STATEMENT_MODULES]
        if unknown:
            raise ValueError(f"Unsupported summary modules: {', '.join(unknown)}")

        ticker = yf.Ticker(symbol)
        summary: Dict[str, Any] = {}
        if any(m in _INFO_MODULE_KEYS for m in modules):
            info = ticker.get_info()
            for module in modules:
                keys = _INFO_MODULE_KEYS.get(module)
                if keys is not None:
                    summary[module] = to_jsonable({k: info[k] for k in keys if k in info})
        if "incomeStatementHistory" in modules:
            summary["incomeStatementHistory"] = {
                "incomeStatementHistory": statement_history(ticker.get_income_stmt())
            }
        if "cashflowStatementHistory" in modules:
            summary["cashflowStatementHistory"] = {
                "cashflowStatements": statement_history(ticker.get_cashflow())
            }
        return {module: summary[module] for module in modules}

    def fetch_historical(self, symbol: str, start: int, end: int) -> List[Dict[str, Any]]:
        """
        Return daily OHLCV rows for ``symbol`` between two Unix timestamps.

        Each row: ``date``, ``open``, ``high``, ``low``, ``close``,
        ``adjClose``, ``volume``.
        """
        df = yf.Ticker(symbol).history(
            interval="1d", start=start, end=end, auto_adjust=False, actions=False
        )
        logger.debug("Historical for %s: %d rows", symbol, len(df))
        return frame_to_records(df, _HISTORICAL_COLUMNS)


# ── private helpers ───────────────────────────────────────────────────────────


def _events(df: pd.DataFrame, column: str, key: str) -> List[Dict[str, Any]]:
    """Non-zero entries of an action column (dividends / splits) as dated dicts."""
    if column not in df.columns:
        return []
    series = df[column]
    series = series[series.fillna(0) != 0].sort_index()
    return [{"date": to_jsonable(ts), key: to_jsonable(v)} for ts, v in series.items()]


@lru_cache(maxsize=1)
def get_fetcher() -> YFinanceFetcher:
    """
    Return the application-wide fetcher singleton.

    The first call configures yfinance; later calls reuse the instance.
    """
    configure_upstream_client(get_settings().UPSTREAM_LOG_LEVEL)
    return YFinanceFetcher()
