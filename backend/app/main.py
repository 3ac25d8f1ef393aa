"""
app/main.py
────────────
FastAPI application factory.

All request handling lives in ``app/api/endpoints/``.
This file is intentionally slim: it wires together logging, middleware,
routers, error handling and lifecycle events only.

API Layout
----------
GET  /                         Health check
GET  /api/cotacao/{ticker}     Current quote (selected fields)
GET  /api/historico/{ticker}   Price chart for a B3 ticker (.SA appended)
GET  /api/busca?termo=         Keyword search
GET  /api/sumario/{ticker}     Fundamentals summary
GET  /api/grafico/{ticker}     Daily series for charting
GET  /api/mercado              S&P 500 and Ibovespa quotes

OpenAPI docs
------------
- Swagger UI:  http://localhost:3000/docs
- ReDoc:       http://localhost:3000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.dependencies import get_executor
from app.api.router import api_router
from core.config import get_settings
from core.logging_config import configure_logging
from market_data.fetcher import get_fetcher

logger = logging.getLogger(__name__)

MSG_INTERNAL_ERROR = "Erro interno do servidor."


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application startup and shutdown logic.

    Startup:  Configure logging and the yfinance client once, before the
              first request.
    Shutdown: Drain the thread pool used for blocking yfinance calls.
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Starting %s v%s (debug=%s)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
    )
    get_fetcher()  # one-time yfinance configuration

    yield  # ← application runs here

    logger.info("Shutting down %s", settings.APP_TITLE)
    get_executor().shutdown(wait=False, cancel_futures=True)
    # A restarted app in the same process must get a fresh pool.
    get_executor.cache_clear()


# ── App factory ───────────────────────────────────────────────────────────────

settings = get_settings()

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# ── Error handling ────────────────────────────────────────────────────────────


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Keep the ``{"erro": ...}`` envelope for failures no route anticipated."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"erro": MSG_INTERNAL_ERROR})


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness probe.

    Returns:
        Status and current API version.
    """
    return {"status": "ok", "version": settings.APP_VERSION}


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
