"""
schemas/market.py
─────────────────
Pydantic schemas for the shaped responses.

Only two routes reshape upstream data:

  GET /api/cotacao/{ticker}   → ``QuoteSnapshot``
  GET /api/mercado            → ``MarketOverview``

The others pass Yahoo's payload through untouched.  ``ErrorEnvelope``
documents the failure body shared by every route.

Wire names are Portuguese (``nome``, ``precoAtual``...) and declared as
aliases; FastAPI serialises by alias.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class QuoteSnapshot(BaseModel):
    """Selected fields of a live quote."""

    model_config = ConfigDict(populate_by_name=True)

    ticker: Optional[str] = Field(default=None, description="Yahoo symbol, e.g. PETR4.SA")
    name: Optional[str] = Field(default=None, alias="nome")
    price: Optional[float] = Field(default=None, alias="precoAtual")
    change_percent: Optional[float] = Field(default=None, alias="variacaoPercentual")
    dividend_yield: Optional[float] = Field(default=None, alias="dividendYield")
    low_52_weeks: Optional[float] = Field(default=None, alias="precoMin52Semanas")
    high_52_weeks: Optional[float] = Field(default=None, alias="precoMax52Semanas")
    average_volume: Optional[Union[int, float]] = Field(default=None, alias="volumeMedio")
    currency: Optional[str] = Field(default=None, alias="moeda")

    @classmethod
    def from_upstream(cls, quote: Mapping[str, Any]) -> "QuoteSnapshot":
        """Pick the snapshot fields out of a raw Yahoo quote."""
        return cls(
            ticker=quote.get("symbol"),
            name=quote.get("longName"),
            price=quote.get("regularMarketPrice"),
            change_percent=quote.get("regularMarketChangePercent"),
            dividend_yield=quote.get("dividendYield"),
            low_52_weeks=quote.get("fiftyTwoWeekLow"),
            high_52_weeks=quote.get("fiftyTwoWeekHigh"),
            average_volume=quote.get("averageDailyVolume3Month"),
            currency=quote.get("currency"),
        )


class MarketOverview(BaseModel):
    """Raw quotes for the two reference indices."""

    sp500: Dict[str, Any] = Field(..., description="Quote for ^GSPC (S&P 500).")
    ibov: Dict[str, Any] = Field(..., description="Quote for ^BVSP (Ibovespa).")


class ErrorEnvelope(BaseModel):
    """Body of every 4xx / 5xx response."""

    erro: str
    detalhes: Optional[str] = None
