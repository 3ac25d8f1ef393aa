"""
app/api/endpoints/summary.py
────────────────────────────
Company summary.

Routes
------
GET /api/sumario/{ticker}   summaryDetail, summaryProfile, financialData,
                            incomeStatementHistory, cashflowStatementHistory.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.responses import UPSTREAM_ERROR_RESPONSES, render
from market_data.coordinator import MarketCoordinator

router = APIRouter()


@router.get(
    "/sumario/{ticker}",
    responses=UPSTREAM_ERROR_RESPONSES,
    summary="Fundamentals summary for a ticker",
)
async def get_summary(
    ticker: str,
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    """Return the five summary modules keyed by module name."""
    return render(await coordinator.summary(ticker))
