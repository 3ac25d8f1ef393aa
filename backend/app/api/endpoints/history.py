"""
app/api/endpoints/history.py
────────────────────────────
Price history endpoints.

Routes
------
GET /api/historico/{ticker}?intervalo=&inicio=&fim=   Chart for a B3 ticker.
GET /api/grafico/{ticker}?inicio=&fim=                Daily series for charting.

Dates are ``YYYY-MM-DD`` and converted to Unix seconds before the
upstream call.  ``/historico`` appends ``.SA`` to the ticker when missing;
``/grafico`` uses the ticker as given.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.responses import ERROR_RESPONSES, render
from market_data.coordinator import MarketCoordinator

router = APIRouter()


@router.get(
    "/historico/{ticker}",
    responses=ERROR_RESPONSES,
    summary="Price chart for a B3 ticker",
)
async def get_price_history(
    ticker: str,
    intervalo: str = Query(default="1d", description="Bar interval (1d, 1wk, 1mo, ...)."),
    inicio: Optional[str] = Query(default=None, description="Start date, YYYY-MM-DD."),
    fim: Optional[str] = Query(default=None, description="End date, YYYY-MM-DD."),
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    """
    Return Yahoo's chart (meta, quotes, events) for ``ticker`` on B3.

    Raises 400 when ``inicio`` / ``fim`` are missing or unparseable; on an
    upstream failure the 500 body carries the provider message in
    ``detalhes``.
    """
    return render(await coordinator.price_history(ticker, intervalo, inicio, fim))


@router.get(
    "/grafico/{ticker}",
    responses=ERROR_RESPONSES,
    summary="Daily OHLCV series for charting",
)
async def get_chart_series(
    ticker: str,
    inicio: Optional[str] = Query(default=None, description="Start date, YYYY-MM-DD."),
    fim: Optional[str] = Query(default=None, description="End date, YYYY-MM-DD."),
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    """Return one row per trading day between ``inicio`` and ``fim``."""
    return render(await coordinator.chart_series(ticker, inicio, fim))
