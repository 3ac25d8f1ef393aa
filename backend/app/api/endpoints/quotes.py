"""
app/api/endpoints/quotes.py
───────────────────────────
Live quote endpoint.

Routes
------
GET /api/cotacao/{ticker}   Selected fields of the current quote.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.responses import UPSTREAM_ERROR_RESPONSES, render
from market_data.coordinator import MarketCoordinator
from schemas.market import QuoteSnapshot

router = APIRouter()


@router.get(
    "/cotacao/{ticker}",
    response_model=QuoteSnapshot,
    responses=UPSTREAM_ERROR_RESPONSES,
    summary="Current quote for a ticker",
)
async def get_quote(
    ticker: str,
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    """
    Return price, daily change, dividend yield, 52-week range, average
    volume and currency for ``ticker``.

    The ticker is passed to Yahoo as given (use ``PETR4.SA`` for B3 stocks).
    """
    return render(await coordinator.quote(ticker))
