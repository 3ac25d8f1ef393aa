"""
app/api/router.py
─────────────────
Aggregates the endpoint routers; mounted under ``/api`` by ``app/main.py``.
"""

from fastapi import APIRouter

from app.api.endpoints import history, market, quotes, search, summary

api_router = APIRouter()
api_router.include_router(quotes.router, tags=["quotes"])
api_router.include_router(history.router, tags=["history"])
api_router.include_router(search.router, tags=["search"])
api_router.include_router(summary.router, tags=["summary"])
api_router.include_router(market.router, tags=["market"])
