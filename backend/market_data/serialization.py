"""
market_data/serialization.py
────────────────────────────
Turn yfinance output (dicts, DataFrames, numpy scalars) into plain
JSON-safe Python data.

Starlette renders responses with ``allow_nan=False``, so every NaN / inf
coming back from Yahoo must become ``None`` before it leaves the fetcher.
"""

import math
from datetime import date, datetime
from typing import Any, Dict, List, Mapping

import numpy as np
import pandas as pd


def to_jsonable(value: Any) -> Any:
    """
    Recursively convert ``value`` into JSON-safe data.

    - ``dict`` / ``list`` / ``tuple`` are walked; dict keys become strings.
    - ``pd.Timestamp`` / ``datetime`` / ``date`` → ISO-8601 string.
    - numpy scalars → Python scalars.
    - NaN, ±inf, ``NaT`` → ``None``.
    """
    if isinstance(value, Mapping):
        return {_key(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, np.generic):
        value = value.item()
    if value is pd.NaT:
        return None
    if isinstance(value, (pd.Timestamp, datetime, date)):
        return value.isoformat()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _key(key: Any) -> str:
    if isinstance(key, (pd.Timestamp, datetime, date)):
        return key.isoformat()
    return str(key)


def frame_to_records(df: pd.DataFrame, columns: Mapping[str, str]) -> List[Dict[str, Any]]:
    """
    Flatten a date-indexed price frame into a list of row dicts.

    Args:
        df:      DataFrame indexed by timestamp (yfinance ``history`` output).
        columns: Source column → output key.  Columns absent from ``df`` are
                 emitted as ``None`` so every row has the same keys.

    Returns:
        One dict per row, oldest first, each with a ``date`` key.
    """
    records: List[Dict[str, Any]] = []
    for ts, row in df.sort_index().iterrows():
        record: Dict[str, Any] = {"date": to_jsonable(ts)}
        for src, dst in columns.items():
            record[dst] = to_jsonable(row[src]) if src in row.index else None
        records.append(record)
    return records


def statement_history(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Reshape a yfinance financial statement into one dict per period.

    yfinance returns statements with line items as rows and period-end
    dates as columns.  The output mirrors Yahoo's ``*StatementHistory``
    modules: newest period first, each entry carrying its ``endDate``.
    """
    if df is None or df.empty:
        return []
    periods: List[Dict[str, Any]] = []
    for end_date in sorted(df.columns, reverse=True):
        entry: Dict[str, Any] = {"endDate": to_jsonable(end_date)}
        for item, amount in df[end_date].items():
            entry[str(item)] = to_jsonable(amount)
        periods.append(entry)
    return periods
