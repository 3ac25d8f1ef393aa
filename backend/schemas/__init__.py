"""
Pydantic schemas for response serialization.

Separate from the upstream client (market_data) and routes (HTTP layer).
"""

from schemas.market import ErrorEnvelope, MarketOverview, QuoteSnapshot

__all__ = [
    "ErrorEnvelope",
    "MarketOverview",
    "QuoteSnapshot",
]
