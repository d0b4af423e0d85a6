"""Date-range arithmetic for gap detection and chunked upstream requests."""

from datetime import date, timedelta
from typing import List, Optional, Tuple

import pandas as pd

DateRange = Tuple[date, date]


def split_date_range(start: date, end: date, years: int = 5) -> List[DateRange]:
    """
    Split an inclusive range into consecutive windows of at most ``years`` years.

    Each window starts one day after the previous one ends and the last
    window is clipped to ``end``, so the windows cover the range exactly.

    Args:
        start: First date (inclusive)
        end: Last date (inclusive)
        years: Window length in years

    Returns:
        List of (chunk_start, chunk_end) tuples, empty if start > end
    """
    if years < 1:
        raise ValueError(f"Chunk length must be at least one year, got {years}")

    chunks: List[DateRange] = []
    chunk_start = start
    while chunk_start <= end:
        # DateOffset keeps Feb 29 starts valid in non-leap target years
        window_end = (pd.Timestamp(chunk_start) + pd.DateOffset(years=years)).date()
        chunk_end = min(window_end - timedelta(days=1), end)
        chunks.append((chunk_start, chunk_end))
        chunk_start = chunk_end + timedelta(days=1)
    return chunks


def freshness_boundary(today: date) -> date:
    """
    Latest date the cache must reach to count as fresh: yesterday,
    moved back to Friday when yesterday falls on a weekend.
    """
    boundary = today - timedelta(days=1)
    while boundary.weekday() >= 5:
        boundary -= timedelta(days=1)
    return boundary


def plan_fetch_ranges(
    cached_min: Optional[date],
    cached_max: Optional[date],
    start: date,
    end: date,
    today: date,
) -> List[DateRange]:
    """
    Work out which ranges must be fetched so the cache covers [start, end].

    Backward gap: nothing cached, or the cache starts after ``start``.
    The fetch runs up to the cached minimum so the cached span stays
    contiguous.

    Forward gap: nothing cached, or the cache ends before the freshness
    boundary and before ``end``. The fetch runs from the cached maximum.

    Args:
        cached_min: Earliest cached date for the symbol
        cached_max: Latest cached date for the symbol
        start: Requested start (inclusive)
        end: Requested end (inclusive)
        today: Caller's current date

    Returns:
        Distinct ranges to fetch, in request order
    """
    ranges: List[DateRange] = []

    if cached_min is None or cached_min > start:
        ranges.append((start, cached_min or end))

    boundary = freshness_boundary(today)
    if cached_max is None or (cached_max < boundary and cached_max < end):
        forward = (cached_max or start, end)
        if forward[0] <= forward[1] and forward not in ranges:
            ranges.append(forward)

    return ranges
