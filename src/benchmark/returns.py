"""Return calculations over cached close series."""

from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .models import PricePoint, ReturnPoint, ReturnsCalendar, ReturnsCalendarRow


def normalize_to_return_pct(points: Sequence[Tuple[date, float]]) -> List[ReturnPoint]:
    """
    Convert a value series into cumulative returns from its first point.

    return_pct = (value - base) / base * 100, base = first value.

    Args:
        points: (date, value) pairs ordered by date

    Returns:
        ReturnPoints, empty if the series is empty or its base is zero
    """
    if not points:
        return []

    base = points[0][1]
    if not base:
        return []

    return [
        ReturnPoint(date=d, return_pct=(value - base) / base * 100)
        for d, value in points
    ]


def closes_to_return_pct(points: Sequence[PricePoint]) -> List[ReturnPoint]:
    """Shortcut for ``normalize_to_return_pct`` over cached closes."""
    return normalize_to_return_pct([(p.date, p.close) for p in points])


def _pct_change(first: float, last: float) -> Optional[float]:
    if not first:
        return None
    return (last - first) / first * 100


def build_returns_calendar(points: Sequence[PricePoint], symbol: str = "") -> ReturnsCalendar:
    """
    Build a year x month grid of returns from daily closes.

    Each month's return compares its last close with its first close.
    A year's annual return compares the last close of its latest month
    with the first close of January (None when January is missing).

    Args:
        points: Daily closes ordered by date
        symbol: Symbol recorded on the result

    Returns:
        ReturnsCalendar with rows sorted by year descending, per-month
        average/median across years and the average annual return
    """
    if not points:
        return ReturnsCalendar(symbol=symbol)

    df = pd.DataFrame(
        {"close": [p.close for p in points]},
        index=pd.DatetimeIndex([pd.Timestamp(p.date) for p in points]),
    ).sort_index()

    grouped = df["close"].groupby([df.index.year, df.index.month])
    monthly = pd.DataFrame({"first": grouped.first(), "last": grouped.last()})

    month_ends: Dict[int, Dict[int, Tuple[float, float]]] = {}
    for (year, month), row in monthly.iterrows():
        month_ends.setdefault(int(year), {})[int(month)] = (float(row["first"]), float(row["last"]))

    rows: List[ReturnsCalendarRow] = []
    for year in sorted(month_ends, reverse=True):
        months_data = month_ends[year]
        months: List[Optional[float]] = [None] * 12
        for month, (first, last) in months_data.items():
            months[month - 1] = _pct_change(first, last)

        annual = None
        if 1 in months_data:
            latest_month = max(months_data)
            annual = _pct_change(months_data[1][0], months_data[latest_month][1])

        rows.append(ReturnsCalendarRow(year=year, months=months, annual=annual))

    average: List[Optional[float]] = []
    median: List[Optional[float]] = []
    for m in range(12):
        values = [r.months[m] for r in rows if r.months[m] is not None]
        if values:
            average.append(float(np.mean(values)))
            median.append(float(np.median(values)))
        else:
            average.append(None)
            median.append(None)

    annual_values = [r.annual for r in rows if r.annual is not None]
    avg_annual = float(np.mean(annual_values)) if annual_values else None

    return ReturnsCalendar(
        symbol=symbol,
        rows=rows,
        average=average,
        median=median,
        avg_annual=avg_annual,
    )
