"""
app/api/endpoints/search.py
───────────────────────────
Keyword search.

Routes
------
GET /api/busca?termo=...   Yahoo symbol / news search.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.api.dependencies import get_coordinator
from app.api.responses import ERROR_RESPONSES, render
from market_data.coordinator import MarketCoordinator

router = APIRouter()


@router.get("/busca", responses=ERROR_RESPONSES, summary="Search tickers by keyword")
async def search(
    termo: Optional[str] = Query(default=None, description="Company name or symbol fragment."),
    coordinator: MarketCoordinator = Depends(get_coordinator),
) -> JSONResponse:
    return render(await coordinator.search(termo))
