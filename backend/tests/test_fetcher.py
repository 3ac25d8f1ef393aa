"""
tests/test_fetcher.py
──────────────────────
Unit tests for the yfinance wrapper and JSON shaping.

``yfinance.Ticker`` / ``yfinance.Search`` are patched, so nothing touches the network.
"""

import logging
import math
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest
import yfinance as yf

from market_data.coordinator import SUMMARY_MODULES
from market_data.fetcher import YFinanceFetcher, configure_upstream_client
from market_data.serialization import to_jsonable

_TICKER = "market_data.fetcher.yf.Ticker"


def _price_frame(with_actions: bool = False) -> pd.DataFrame:
    """Two daily bars, deliberately out of order, as yfinance.history returns them."""
    index = pd.DatetimeIndex(
        ["2024-01-03", "2024-01-02"], name="Date"
    ).tz_localize("America/Sao_Paulo")
    data = {
        "Open": [37.0, 36.5],
        "High": [38.0, 37.2],
        "Low": [36.8, 36.1],
        "Close": [37.9, 37.0],
        "Adj Close": [37.5, math.nan],
        "Volume": [1000, 2000],
    }
    if with_actions:
        data["Dividends"] = [0.0, 1.25]
        data["Stock Splits"] = [0.0, 0.0]
    return pd.DataFrame(data, index=index)


# ── quote ─────────────────────────────────────────────────────────────────────


class TestFetchQuote:
    def test_returns_info(self) -> None:
        with patch(_TICKER) as ticker_cls:
            ticker_cls.return_value.get_info.return_value = {
                "symbol": "PETR4.SA",
                "dividendYield": np.float64("nan"),
            }
            quote = YFinanceFetcher().fetch_quote("PETR4.SA")

        ticker_cls.assert_called_once_with("PETR4.SA")
        assert quote == {"symbol": "PETR4.SA", "dividendYield": None}

    def test_raises_when_yahoo_has_no_quote(self) -> None:
        with patch(_TICKER) as ticker_cls:
            ticker_cls.return_value.get_info.return_value = {"trailingPegRatio": None}
            with pytest.raises(ValueError, match="No quote data"):
                YFinanceFetcher().fetch_quote("XXXX")


# ── chart / historical ────────────────────────────────────────────────────────


class TestFetchChart:
    def test_shapes_meta_quotes_and_events(self) -> None:
        with patch(_TICKER) as ticker_cls:
            ticker = ticker_cls.return_value
            ticker.history.return_value = _price_frame(with_actions=True)
            ticker.get_history_metadata.return_value = {"currency": "BRL", "symbol": "PETR4.SA"}

            chart = YFinanceFetcher().fetch_chart("PETR4.SA", "1wk", 1704067200, 1706745600)

        ticker.history.assert_called_once_with(
            interval="1wk", start=1704067200, end=1706745600, auto_adjust=False, actions=True
        )
        assert chart["meta"] == {"currency": "BRL", "symbol": "PETR4.SA"}
        assert [q["date"] for q in chart["quotes"]] == [
            "2024-01-02T00:00:00-03:00",
            "2024-01-03T00:00:00-03:00",
        ]
        first = chart["quotes"][0]
        assert first["open"] == 36.5
        assert first["adjclose"] is None
        assert first["volume"] == 2000
        assert chart["events"] == {
            "dividends": [{"date": "2024-01-02T00:00:00-03:00", "amount": 1.25}],
            "splits": [],
        }


class TestFetchHistorical:
    def test_rows_oldest_first(self) -> None:
        with patch(_TICKER) as ticker_cls:
            ticker = ticker_cls.return_value
            ticker.history.return_value = _price_frame()

            rows = YFinanceFetcher().fetch_historical("PETR4.SA", 1704067200, 1706745600)

        ticker.history.assert_called_once_with(
            interval="1d", start=1704067200, end=1706745600, auto_adjust=False, actions=False
        )
        assert len(rows) == 2
        assert set(rows[0]) == {"date", "open", "high", "low", "close", "adjClose", "volume"}
        assert rows[1]["close"] == 37.9
        assert rows[1]["adjClose"] == 37.5

    def test_empty_frame_gives_empty_list(self) -> None:
        with patch(_TICKER) as ticker_cls:
            ticker_cls.return_value.history.return_value = pd.DataFrame()
            assert YFinanceFetcher().fetch_historical("PETR4.SA", 0, 1) == []


# ── search ────────────────────────────────────────────────────────────────────


def test_search_returns_raw_response() -> None:
    response = {"count": 1, "quotes": [{"symbol": "VALE3.SA"}], "news": []}
    with patch("market_data.fetcher.yf.Search") as search_cls:
        search_cls.return_value = MagicMock(response=response)
        assert YFinanceFetcher().search("vale") == response
    search_cls.assert_called_once_with("vale")


# ── summary ───────────────────────────────────────────────────────────────────


class TestFetchSummary:
    def test_builds_all_modules_in_order(self) -> None:
        income = pd.DataFrame(
            {
                pd.Timestamp("2022-12-31"): [641_256.0, 188_328.0],
                pd.Timestamp("2023-12-31"): [511_994.0, 124_606.0],
            },
            index=["TotalRevenue", "NetIncome"],
        )
        with patch(_TICKER) as ticker_cls:
            ticker = ticker_cls.return_value
            ticker.get_info.return_value = {
                "dividendYield": 14.3,
                "sector": "Energy",
                "currentPrice": 38.12,
                "longName": "Petrobras",
            }
            ticker.get_income_stmt.return_value = income
            ticker.get_cashflow.return_value = pd.DataFrame()

            summary = YFinanceFetcher().fetch_summary("PETR4.SA", SUMMARY_MODULES)

        assert list(summary) == list(SUMMARY_MODULES)
        assert summary["summaryDetail"] == {"dividendYield": 14.3}
        assert summary["summaryProfile"] == {"sector": "Energy"}
        assert summary["financialData"] == {"currentPrice": 38.12}
        statements = summary["incomeStatementHistory"]["incomeStatementHistory"]
        assert [s["endDate"] for s in statements] == ["2023-12-31T00:00:00", "2022-12-31T00:00:00"]
        assert statements[0]["NetIncome"] == 124_606.0
        assert summary["cashflowStatementHistory"] == {"cashflowStatements": []}

    def test_unknown_module_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unsupported summary modules"):
            YFinanceFetcher().fetch_summary("PETR4.SA", ["earnings"])


# ── setup / serialization ─────────────────────────────────────────────────────


def test_configure_upstream_client() -> None:
    """yfinance is told to raise and its logger is capped."""
    yf_logger = logging.getLogger("yfinance")
    previous_level = yf_logger.level
    try:
        configure_upstream_client("CRITICAL")
        assert yf.config.debug.hide_exceptions is False
        assert yf_logger.level == logging.CRITICAL
    finally:
        yf.config.debug.hide_exceptions = True
        yf_logger.setLevel(previous_level)


def test_to_jsonable_cleans_non_json_values() -> None:
    value = {
        "nan": np.float64("nan"),
        "int": np.int64(3),
        "ts": pd.Timestamp("2024-01-01"),
        "list": [float("inf"), 1.5],
        5: pd.NaT,
    }
    assert to_jsonable(value) == {
        "nan": None,
        "int": 3,
        "ts": "2024-01-01T00:00:00",
        "list": [None, 1.5],
        "5": None,
    }
