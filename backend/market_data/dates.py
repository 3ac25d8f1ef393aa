"""
market_data/dates.py
────────────────────
Request-parameter helpers shared by the history routes.
"""

from typing import Optional

import pandas as pd

B3_SUFFIX = ".SA"

# Words pandas resolves to the current clock; a calendar date is required.
_CLOCK_KEYWORDS = frozenset({"now", "today"})


def to_unix_seconds(value: Optional[str]) -> Optional[int]:
    """
    Convert a date string to Unix seconds.

    Any string pandas can read as a point in time is accepted
    (``"2024-01-31"``, ``"2024-01-31T10:00:00-03:00"``, ...).  Strings
    without an offset are taken as UTC.  No range or calendar checks are
    applied.  The pandas shortcuts ``"now"`` and ``"today"`` are rejected.

    Args:
        value: Raw query-string value, possibly ``None``.

    Returns:
        Whole seconds since the epoch, or ``None`` when ``value`` is missing
        or does not describe a point in time.
    """
    if value is None or value.strip().lower() in _CLOCK_KEYWORDS:
        return None
    try:
        ts = pd.to_datetime(value, utc=True)
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return int(ts.timestamp())


def with_b3_suffix(ticker: str) -> str:
    """Append ``.SA`` unless the ticker already carries it (``PETR4`` → ``PETR4.SA``)."""
    return ticker if ticker.endswith(B3_SUFFIX) else f"{ticker}{B3_SUFFIX}"
