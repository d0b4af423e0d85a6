"""Benchmark module - cached daily closes for indices and ETFs, and returns built on them."""

from .errors import (
    BenchmarkCacheError,
    InvalidRangeError,
    PersistenceError,
    UpstreamFetchError,
)
from .models import (
    PerformanceComparison,
    PricePoint,
    ReturnPoint,
    ReturnSeries,
    ReturnsCalendar,
    ReturnsCalendarRow,
    SeriesResult,
    SeriesStatus,
)
from .returns import build_returns_calendar, normalize_to_return_pct
from .symbols import BENCHMARK_SYMBOLS, SECTOR_ETFS

# cache, provider and service depend on src.db.repositories; import them
# from their own modules.

__all__ = [
    "BenchmarkCacheError",
    "InvalidRangeError",
    "PersistenceError",
    "UpstreamFetchError",
    "PerformanceComparison",
    "PricePoint",
    "ReturnPoint",
    "ReturnSeries",
    "ReturnsCalendar",
    "ReturnsCalendarRow",
    "SeriesResult",
    "SeriesStatus",
    "build_returns_calendar",
    "normalize_to_return_pct",
    "BENCHMARK_SYMBOLS",
    "SECTOR_ETFS",
]
