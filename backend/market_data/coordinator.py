"""
market_data/coordinator.py
──────────────────────────
Request coordinator: the single entry point the HTTP routes use for
market data.

Workflow (per call)
-------------------
1. Validate / normalise request parameters.  Invalid input returns
   ``Result.err(ClientInputError)`` without touching Yahoo Finance.
2. Run the blocking :class:`YFinanceFetcher` call in a thread pool so the
   event loop is never blocked, optionally bounded by a timeout.
3. Shape the payload where the route needs it and return ``Result.ok``.
   Any upstream exception is logged and returned as
   ``Result.err(UpstreamError)``.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.errors import ClientInputError, Result, ServiceError, UpstreamError
from market_data.dates import to_unix_seconds, with_b3_suffix
from market_data.fetcher import YFinanceFetcher
from schemas.market import MarketOverview, QuoteSnapshot

logger = logging.getLogger(__name__)

SUMMARY_MODULES: Tuple[str, ...] = (
    "summaryDetail",
    "summaryProfile",
    "financialData",
    "incomeStatementHistory",
    "cashflowStatementHistory",
)
SP500_SYMBOL = "^GSPC"
IBOVESPA_SYMBOL = "^BVSP"

MSG_QUOTE_FAILED = "Não foi possível buscar a cotação."
MSG_DATES_REQUIRED = 'Os parâmetros "inicio" e "fim" são obrigatórios no formato YYYY-MM-DD.'
MSG_DATES_INVALID = "Datas inválidas. Use o formato YYYY-MM-DD."
MSG_HISTORY_FAILED = "Não foi possível buscar o histórico de preços."
MSG_TERM_REQUIRED = 'O parâmetro "termo" é obrigatório.'
MSG_SEARCH_FAILED = "Não foi possível realizar a busca."
MSG_SUMMARY_FAILED = "Não foi possível buscar os dados de dividendos."
MSG_MARKET_FAILED = "Não foi possível buscar os dados de mercado."


class MarketCoordinator:
    """
    Validates requests and delegates to the fetcher.

    Args:
        fetcher:  Blocking Yahoo Finance client.
        executor: Thread pool for the blocking calls.
        timeout:  Seconds allowed per upstream call; ``None`` waits forever.

    Example:
        >>> result = await coordinator.quote("PETR4.SA")
        >>> result.value.price
        38.12
    """

    def __init__(
        self,
        fetcher: YFinanceFetcher,
        executor: ThreadPoolExecutor,
        timeout: Optional[float] = None,
    ) -> None:
        self._fetcher = fetcher
        self._executor = executor
        self._timeout = timeout

    # ── public API ────────────────────────────────────────────────────────

    async def quote(self, ticker: str) -> Result[QuoteSnapshot, ServiceError]:
        """Live quote for ``ticker``, reduced to the :class:`QuoteSnapshot` fields."""
        try:
            raw = await self._call(self._fetcher.fetch_quote, ticker)
            snapshot = QuoteSnapshot.from_upstream(raw)
        except Exception as exc:
            logger.error("Quote failed for %s: %s", ticker, _describe(exc))
            return Result.err(UpstreamError(MSG_QUOTE_FAILED))
        return Result.ok(snapshot)

    async def price_history(
        self,
        ticker: str,
        interval: str,
        start: Optional[str],
        end: Optional[str],
    ) -> Result[Dict[str, Any], ServiceError]:
        """
        Price chart for a B3 ticker.

        ``ticker`` gets the ``.SA`` suffix when missing.  Both dates are
        required; upstream failures expose the provider message as
        ``detalhes``.
        """
        symbol = with_b3_suffix(ticker)
        if not start or not end:
            return Result.err(ClientInputError(MSG_DATES_REQUIRED))

        period1 = to_unix_seconds(start)
        period2 = to_unix_seconds(end)
        if period1 is None or period2 is None:
            return Result.err(ClientInputError(MSG_DATES_INVALID))

        try:
            chart = await self._call(
                self._fetcher.fetch_chart,
                symbol,
                interval=interval,
                start=period1,
                end=period2,
            )
        except Exception as exc:
            logger.error("Price history failed for %s: %s", symbol, _describe(exc))
            return Result.err(UpstreamError(MSG_HISTORY_FAILED, details=_describe(exc)))
        return Result.ok(chart)

    async def search(self, term: Optional[str]) -> Result[Dict[str, Any], ServiceError]:
        """Keyword search; an empty or missing ``term`` is rejected."""
        if not term:
            return Result.err(ClientInputError(MSG_TERM_REQUIRED))
        try:
            found = await self._call(self._fetcher.search, term)
        except Exception as exc:
            logger.error("Search failed for %r: %s", term, _describe(exc))
            return Result.err(UpstreamError(MSG_SEARCH_FAILED))
        return Result.ok(found)

    async def summary(self, ticker: str) -> Result[Dict[str, Any], ServiceError]:
        """Aggregated summary across :data:`SUMMARY_MODULES`."""
        try:
            found = await self._call(
                self._fetcher.fetch_summary, ticker, modules=SUMMARY_MODULES
            )
        except Exception as exc:
            logger.error("Summary failed for %s: %s", ticker, _describe(exc))
            return Result.err(UpstreamError(MSG_SUMMARY_FAILED))
        return Result.ok(found)

    async def chart_series(
        self, ticker: str, start: Optional[str], end: Optional[str]
    ) -> Result[List[Dict[str, Any]], ServiceError]:
        """Daily series for charting; missing dates count as invalid."""
        period1 = to_unix_seconds(start)
        period2 = to_unix_seconds(end)
        if period1 is None or period2 is None:
            return Result.err(ClientInputError(MSG_DATES_INVALID))

        try:
            rows = await self._call(
                self._fetcher.fetch_historical, ticker, start=period1, end=period2
            )
        except Exception as exc:
            logger.error("Chart series failed for %s: %s", ticker, _describe(exc))
            return Result.err(UpstreamError(MSG_SUMMARY_FAILED))
        return Result.ok(rows)

    async def market_overview(self) -> Result[MarketOverview, ServiceError]:
        """S&P 500 and Ibovespa quotes, fetched concurrently."""
        try:
            # Both calls are awaited to completion so neither failure goes unretrieved.
            sp500, ibov = await asyncio.gather(
                self._call(self._fetcher.fetch_quote, SP500_SYMBOL),
                self._call(self._fetcher.fetch_quote, IBOVESPA_SYMBOL),
                return_exceptions=True,
            )
            for outcome in (sp500, ibov):
                if isinstance(outcome, BaseException):
                    raise outcome
        except Exception as exc:
            logger.error("Market overview failed: %s", _describe(exc))
            return Result.err(UpstreamError(MSG_MARKET_FAILED))
        return Result.ok(MarketOverview(sp500=sp500, ibov=ibov))

    # ── private helpers ───────────────────────────────────────────────────

    async def _call(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run a blocking fetcher method in the pool, bounded by the timeout."""
        loop = asyncio.get_running_loop()
        future = loop.run_in_executor(self._executor, partial(fn, *args, **kwargs))
        try:
            return await asyncio.wait_for(future, timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            raise TimeoutError(
                f"Yahoo Finance did not answer within {self._timeout:g}s"
            ) from exc


def _describe(exc: BaseException) -> str:
    """Exception message, falling back to the class name when it is empty."""
    return str(exc) or type(exc).__name__
