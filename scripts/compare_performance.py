#!/usr/bin/env python
"""Compare benchmark and sector ETF returns over a chart period.

Usage:
    python scripts/compare_performance.py --period 1Y --benchmarks S&P500 KOSPI
    python scripts/compare_performance.py --period 6M --sectors
    python scripts/compare_performance.py --subject XLK --benchmarks NASDAQ100
"""

import argparse
import logging
import sys
import os
from typing import List

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config.settings import get_settings
from src.db.session import get_session, init_db
from src.benchmark.models import ReturnSeries
from src.benchmark.service import create_benchmark_service
from src.benchmark.symbols import PERIODS

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def summarize(label: str, series: ReturnSeries) -> str:
    if not series.points:
        return f"  {label:<20} no data"
    last = series.points[-1]
    flag = "" if series.status.value == "fresh" else f" [{series.status.value}]"
    return f"  {label:<20} {last.return_pct:+7.2f}%  (as of {last.date}){flag}"


def main() -> None:
    """Print cumulative returns at the end of the period."""
    parser = argparse.ArgumentParser(description="Compare benchmark returns")
    parser.add_argument("--period", type=str, default="3M", choices=sorted(PERIODS))
    parser.add_argument("--benchmarks", type=str, nargs="*", default=["S&P500", "NASDAQ100"])
    parser.add_argument("--subject", type=str, default=None, help="Symbol to chart as subject")
    parser.add_argument("--sectors", action="store_true", help="Show sector ETF returns")
    args = parser.parse_args()

    init_db()
    session = get_session()
    try:
        service = create_benchmark_service(session, settings)
        comparison = service.compare_performance(args.benchmarks, args.period, args.subject)
        sectors = service.sector_etf_returns(args.period) if args.sectors else {}
    finally:
        session.close()

    print(f"\nPERFORMANCE {comparison.start} .. {comparison.end}")
    print("=" * 60)
    lines: List[str] = []
    if comparison.subject:
        lines.append(summarize(f"* {comparison.subject.name}", comparison.subject))
    for name, series in comparison.benchmarks.items():
        lines.append(summarize(name, series))
    if sectors:
        lines.append("-" * 60)
        for ticker, series in sorted(
            sectors.items(),
            key=lambda item: item[1].points[-1].return_pct if item[1].points else float("-inf"),
            reverse=True,
        ):
            lines.append(summarize(f"{ticker} {series.name}", series))
    print("\n".join(lines))


if __name__ == "__main__":
    main()
