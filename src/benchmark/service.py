"""BenchmarkService - the dashboard's consumers of the benchmark cache."""

import logging
from datetime import date, timedelta
from typing import Callable, Dict, Iterable, Optional

from sqlalchemy.orm import Session

from src.config.settings import Settings, get_settings

from .cache import BenchmarkSeriesCache, DateLike, coerce_date
from .errors import UpstreamFetchError
from .models import (
    PerformanceComparison,
    ReturnSeries,
    ReturnsCalendar,
    SeriesResult,
    SeriesStatus,
)
from .provider import YahooBenchmarkProvider
from .returns import build_returns_calendar, closes_to_return_pct
from .symbols import (
    BENCHMARK_SYMBOLS,
    SECTOR_ETFS,
    get_period_dates,
    resolve_symbol,
    years_before,
)

logger = logging.getLogger(__name__)

MAX_CALENDAR_YEARS = 50
DEFAULT_CLOSES_DAYS = 90


class BenchmarkService:
    """Serve benchmark, sector ETF, returns-calendar and comparison series.

    Every series goes through ``BenchmarkSeriesCache.get_series``. A series
    the upstream could not deliver and that has nothing cached raises
    ``UpstreamFetchError``; series served from an outdated cache are
    returned with status ``stale``.
    """

    def __init__(
        self,
        cache: BenchmarkSeriesCache,
        clock: Optional[Callable[[], date]] = None,
    ):
        """
        Initialize BenchmarkService.

        Args:
            cache: Benchmark series cache
            clock: Returns today's date (default: the cache's clock)
        """
        self.cache = cache
        self.clock = clock or cache.clock

    def _series(self, symbol: str, start: DateLike, end: DateLike) -> SeriesResult:
        result = self.cache.get_series(symbol, start, end)
        if result.status == SeriesStatus.FAILED:
            raise UpstreamFetchError(
                result.symbol, result.start, result.end,
                result.error or "no data available",
            )
        return result

    def _return_series(self, name: str, symbol: str, start: date, end: date) -> ReturnSeries:
        result = self._series(symbol, start, end)
        return ReturnSeries(
            name=name,
            symbol=symbol,
            status=result.status,
            points=closes_to_return_pct(result.points),
        )

    def benchmark_closes(
        self,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        names: Optional[Iterable[str]] = None,
    ) -> Dict[str, SeriesResult]:
        """
        Raw close series for named benchmarks.

        Args:
            start: First date, inclusive (default: 90 days before end)
            end: Last date, inclusive (default: today)
            names: Benchmark names (default: all in BENCHMARK_SYMBOLS)

        Returns:
            Mapping of benchmark name -> SeriesResult
        """
        if end is None:
            end = self.clock()
        if start is None:
            start = coerce_date(end, "end") - timedelta(days=DEFAULT_CLOSES_DAYS)

        selected = list(names) if names is not None else list(BENCHMARK_SYMBOLS)
        results: Dict[str, SeriesResult] = {}
        for name in selected:
            symbol = BENCHMARK_SYMBOLS.get(name)
            if not symbol:
                logger.warning(f"Unknown benchmark '{name}', skipping")
                continue
            results[name] = self._series(symbol, start, end)
        return results

    def sector_etf_returns(self, period: str = "3M") -> Dict[str, ReturnSeries]:
        """
        Return-% series for every sector ETF over a chart period.

        Args:
            period: One of 1M, 3M, 6M, 1Y, 3Y, 5Y

        Returns:
            Mapping of ETF ticker -> ReturnSeries (named by sector)
        """
        start, end = get_period_dates(period, self.clock())
        return {
            ticker: self._return_series(sector, ticker, start, end)
            for ticker, sector in SECTOR_ETFS.items()
        }

    def returns_calendar(self, symbol: str = "^GSPC", years: int = 20) -> ReturnsCalendar:
        """
        Monthly returns calendar for a symbol.

        Args:
            symbol: Yahoo symbol or benchmark name
            years: Lookback in years, clamped to [1, 50]

        Returns:
            ReturnsCalendar over [today - years, today]
        """
        years = min(max(int(years), 1), MAX_CALENDAR_YEARS)
        symbol = resolve_symbol(symbol)
        today = self.clock()

        result = self._series(symbol, years_before(today, years), today)
        calendar = build_returns_calendar(result.points, symbol=symbol)
        calendar.status = result.status
        return calendar

    def compare_performance(
        self,
        benchmarks: Iterable[str],
        period: str = "3M",
        subject_symbol: Optional[str] = None,
    ) -> PerformanceComparison:
        """
        Compare a subject's return series against benchmarks.

        Args:
            benchmarks: Benchmark names; unknown names are skipped
            period: Chart period code
            subject_symbol: Optional symbol (or benchmark name) to chart as subject

        Returns:
            PerformanceComparison with return-% series
        """
        start, end = get_period_dates(period, self.clock())

        subject = None
        if subject_symbol:
            subject = self._return_series(
                subject_symbol, resolve_symbol(subject_symbol), start, end
            )

        series: Dict[str, ReturnSeries] = {}
        for name in benchmarks:
            symbol = BENCHMARK_SYMBOLS.get(name)
            if not symbol:
                logger.warning(f"Unknown benchmark '{name}', skipping")
                continue
            series[name] = self._return_series(name, symbol, start, end)

        return PerformanceComparison(start=start, end=end, subject=subject, benchmarks=series)


def create_benchmark_service(
    session: Session,
    settings: Optional[Settings] = None,
) -> BenchmarkService:
    """Wire a BenchmarkService from settings with the Yahoo provider."""
    settings = settings or get_settings()
    provider = YahooBenchmarkProvider(
        timeout=settings.fetch_timeout_seconds,
        max_attempts=settings.fetch_max_attempts,
        backoff_seconds=settings.fetch_backoff_seconds,
    )
    cache = BenchmarkSeriesCache(session, provider, chunk_years=settings.chunk_years)
    return BenchmarkService(cache)
