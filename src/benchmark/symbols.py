"""Benchmark and sector ETF symbol catalogues, and chart periods."""

from datetime import date
from typing import Dict, Tuple

import pandas as pd


# Benchmark display names -> Yahoo Finance symbols
BENCHMARK_SYMBOLS: Dict[str, str] = {
    "KOSPI": "^KS11",
    "S&P500": "^GSPC",
    "NASDAQ100": "^NDX",
    "NASDAQ": "^IXIC",
}

# SPDR sector ETFs -> sector label
SECTOR_ETFS: Dict[str, str] = {
    "XLK": "Technology",
    "XLF": "Financials",
    "XLV": "Health Care",
    "XLE": "Energy",
    "XLI": "Industrials",
    "XLY": "Consumer Disc.",
    "XLP": "Consumer Staples",
    "XLRE": "Real Estate",
    "XLU": "Utilities",
    "XLB": "Materials",
    "XLC": "Communication",
}

# Period code -> lookback offset
PERIODS: Dict[str, pd.DateOffset] = {
    "1M": pd.DateOffset(months=1),
    "3M": pd.DateOffset(months=3),
    "6M": pd.DateOffset(months=6),
    "1Y": pd.DateOffset(years=1),
    "3Y": pd.DateOffset(years=3),
    "5Y": pd.DateOffset(years=5),
}
DEFAULT_PERIOD = "3M"


def resolve_symbol(name: str) -> str:
    """Map a benchmark display name to its symbol; unknown names pass through."""
    return BENCHMARK_SYMBOLS.get(name, name)


def get_period_dates(period: str, today: date) -> Tuple[date, date]:
    """
    Start and end dates for a chart period ending today.

    Unknown period codes fall back to 3M.
    """
    offset = PERIODS.get(period, PERIODS[DEFAULT_PERIOD])
    start = (pd.Timestamp(today) - offset).date()
    return start, today


def years_before(today: date, years: int) -> date:
    """Same calendar day ``years`` years earlier (Feb 29 -> Feb 28)."""
    return (pd.Timestamp(today) - pd.DateOffset(years=years)).date()
