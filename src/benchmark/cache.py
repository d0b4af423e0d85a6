"""Benchmark series cache.

Keeps ``benchmark_prices`` filled for the ranges callers ask for, fetching
only the missing prefix/suffix from the upstream provider in chunks and
writing with insert-on-conflict-do-nothing.

Usage:
    cache = BenchmarkSeriesCache(session, YahooBenchmarkProvider())
    cache.ensure("^GSPC", date(2020, 1, 1), date.today())
    points = cache.read("^GSPC", date(2020, 1, 1), date.today())
"""

import logging
from datetime import date
from typing import Callable, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from src.db.repositories.benchmark_repo import BenchmarkPriceRepository

from .chunking import plan_fetch_ranges, split_date_range
from .errors import InvalidRangeError, UpstreamFetchError
from .models import PricePoint, SeriesResult, SeriesStatus
from .provider import BenchmarkProvider

logger = logging.getLogger(__name__)

DateLike = Union[date, str]


def parse_range(symbol: str, start: DateLike, end: DateLike) -> Tuple[str, date, date]:
    """
    Validate a (symbol, start, end) request.

    Dates may be ``date`` objects or ISO ``YYYY-MM-DD`` strings.

    Raises:
        InvalidRangeError: On empty symbol, malformed date or start > end
    """
    if not symbol or not str(symbol).strip():
        raise InvalidRangeError("Symbol must be a non-empty string")

    start_date = coerce_date(start, "start")
    end_date = coerce_date(end, "end")
    if start_date > end_date:
        raise InvalidRangeError(f"Start {start_date} is after end {end_date}")

    return str(symbol).strip(), start_date, end_date


def coerce_date(value: DateLike, name: str) -> date:
    if isinstance(value, date):
        # datetime is a date subclass; keep the day only
        return value if type(value) is date else value.date()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise InvalidRangeError(f"Malformed {name} date '{value}': expected YYYY-MM-DD") from e
    raise InvalidRangeError(f"Unsupported {name} date type: {type(value).__name__}")


class BenchmarkSeriesCache:
    """Gap-filling cache of daily closes per symbol."""

    def __init__(
        self,
        session: Session,
        provider: BenchmarkProvider,
        chunk_years: int = 5,
        clock: Callable[[], date] = date.today,
        source: Optional[str] = None,
    ):
        """
        Initialize the cache.

        Args:
            session: SQLAlchemy session for the cache table
            provider: Upstream source of daily closes
            chunk_years: Maximum years per upstream request
            clock: Returns the caller's current date
            source: Provider name stored on new rows
        """
        self.repo = BenchmarkPriceRepository(session)
        self.provider = provider
        self.chunk_years = chunk_years
        self.clock = clock
        self.source = source or getattr(provider, "source", "yfinance")

    def ensure(self, symbol: str, start: DateLike, end: DateLike) -> int:
        """
        Make sure the cache holds the closes for [start, end].

        Fetches the backward gap (before the cached minimum) and the forward
        gap (after the cached maximum, when it is older than yesterday),
        each split into chunks issued one after another. Every chunk is
        committed before the next one is requested.

        Args:
            symbol: Benchmark symbol
            start: First date (inclusive)
            end: Last date (inclusive)

        Returns:
            Number of new rows stored

        Raises:
            InvalidRangeError: Before any I/O, for a bad request
            UpstreamFetchError: If a chunk could not be fetched
            PersistenceError: If the store rejected a read or write
        """
        symbol, start_date, end_date = parse_range(symbol, start, end)

        cached_min, cached_max = self.repo.get_bounds(symbol)
        ranges = plan_fetch_ranges(cached_min, cached_max, start_date, end_date, self.clock())

        if not ranges:
            logger.debug(f"{symbol}: cache covers {start_date}..{end_date}, no fetch needed")
            return 0

        logger.info(
            f"{symbol}: cached {cached_min}..{cached_max}, "
            f"fetching {', '.join(f'{s}..{e}' for s, e in ranges)}"
        )

        stored = 0
        for fetch_start, fetch_end in ranges:
            for chunk_start, chunk_end in split_date_range(fetch_start, fetch_end, self.chunk_years):
                points = self.provider.fetch_history(symbol, chunk_start, chunk_end)
                stored += self.repo.insert_ignore(symbol, points, source=self.source)

        logger.info(f"{symbol}: stored {stored} new closes")
        return stored

    def read(self, symbol: str, start: DateLike, end: DateLike) -> List[PricePoint]:
        """Cached closes with start <= date <= end, ordered by date."""
        symbol, start_date, end_date = parse_range(symbol, start, end)
        return self.repo.get_series(symbol, start_date, end_date)

    def get_series(self, symbol: str, start: DateLike, end: DateLike) -> SeriesResult:
        """
        Ensure then read, reporting whether the upstream fetch succeeded.

        Upstream failures are not raised: the cached points are returned
        with status STALE, or FAILED when nothing is cached for the range.
        Invalid requests and store failures still raise.

        Args:
            symbol: Benchmark symbol
            start: First date (inclusive)
            end: Last date (inclusive)

        Returns:
            SeriesResult tagged fresh, stale or failed
        """
        symbol, start_date, end_date = parse_range(symbol, start, end)

        status = SeriesStatus.FRESH
        error: Optional[str] = None
        try:
            self.ensure(symbol, start_date, end_date)
        except UpstreamFetchError as e:
            logger.warning(f"Serving cached data for {symbol} after upstream failure: {e}")
            status = SeriesStatus.STALE
            error = str(e)

        points = self.repo.get_series(symbol, start_date, end_date)
        if status == SeriesStatus.STALE and not points:
            status = SeriesStatus.FAILED

        return SeriesResult(
            symbol=symbol,
            start=start_date,
            end=end_date,
            status=status,
            points=points,
            error=error,
        )
