#!/usr/bin/env python
"""Fill the benchmark price cache for a set of symbols.

Usage:
    python scripts/warm_benchmark_cache.py --symbols ^GSPC ^KS11 --years 20
    python scripts/warm_benchmark_cache.py --sectors --start 2020-01-01

Fetches only the ranges not already cached, in 5-year chunks.
"""

import argparse
import logging
import sys
import os
from datetime import date, datetime
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config.settings import get_settings
from src.db.session import get_session, init_db
from src.benchmark.cache import BenchmarkSeriesCache
from src.benchmark.errors import BenchmarkCacheError
from src.benchmark.provider import YahooBenchmarkProvider
from src.benchmark.symbols import BENCHMARK_SYMBOLS, SECTOR_ETFS, years_before

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    return datetime.strptime(date_str, "%Y-%m-%d").date()


def main() -> int:
    """Warm the cache and report per-symbol results."""
    parser = argparse.ArgumentParser(description="Fill the benchmark price cache")
    parser.add_argument(
        "--symbols",
        type=str,
        nargs="+",
        default=None,
        help="Yahoo symbols (default: all benchmark indices)",
    )
    parser.add_argument(
        "--sectors",
        action="store_true",
        help="Also warm all sector ETFs",
    )
    parser.add_argument(
        "--start",
        type=parse_date,
        default=None,
        help="Start date (YYYY-MM-DD), overrides --years",
    )
    parser.add_argument(
        "--end",
        type=parse_date,
        default=None,
        help="End date (YYYY-MM-DD, default: today)",
    )
    parser.add_argument(
        "--years",
        type=int,
        default=5,
        help="Lookback in years when --start is not given (default: 5)",
    )

    args = parser.parse_args()

    symbols: List[str] = args.symbols or list(BENCHMARK_SYMBOLS.values())
    if args.sectors:
        symbols += [s for s in SECTOR_ETFS if s not in symbols]
    end = args.end or date.today()
    start = args.start or years_before(end, args.years)

    logger.info(f"Warming {len(symbols)} symbols from {start} to {end}")

    init_db()
    session = get_session()
    failures = 0
    try:
        provider = YahooBenchmarkProvider(
            timeout=settings.fetch_timeout_seconds,
            max_attempts=settings.fetch_max_attempts,
            backoff_seconds=settings.fetch_backoff_seconds,
        )
        cache = BenchmarkSeriesCache(session, provider, chunk_years=settings.chunk_years)

        for symbol in symbols:
            try:
                stored = cache.ensure(symbol, start, end)
                count = len(cache.read(symbol, start, end))
                print(f"  {symbol:<10} +{stored:>5} new   {count:>6} cached in range")
            except BenchmarkCacheError as e:
                failures += 1
                logger.error(f"Failed to warm {symbol}: {e}")
    finally:
        session.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
