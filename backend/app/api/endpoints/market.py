"""
app/api/endpoints/market.py
───────────────────────────
Market overview.

Routes
------
GET /api/mercado   S&P 500 (^GSPC) and Ibovespa (^BVSP) quotes.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.responses import UPSTREAM_ERROR_RESPONSES, render
from market_data.coordinator import MarketCoordinator
from schemas.market import MarketOverview

router = APIRouter()


@router.get(
    "/mercado",
    response_model=MarketOverview,
    responses=UPSTREAM_ERROR_RESPONSES,
    summary="Reference index quotes",
)
async def get_market_overview(
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    return render(await coordinator.market_overview())
