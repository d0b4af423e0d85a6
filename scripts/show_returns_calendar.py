#!/usr/bin/env python
"""Print the monthly returns calendar of a benchmark.

Usage:
    python scripts/show_returns_calendar.py --symbol ^GSPC --years 20
"""

import argparse
import logging
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config.settings import get_settings
from src.db.session import get_session, init_db
from src.benchmark.service import create_benchmark_service

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def fmt(value: Optional[float]) -> str:
    return f"{value:+6.1f}" if value is not None else "     -"


def main() -> None:
    """Build and print the calendar."""
    parser = argparse.ArgumentParser(description="Monthly returns calendar")
    parser.add_argument("--symbol", type=str, default="^GSPC", help="Symbol or benchmark name")
    parser.add_argument("--years", type=int, default=20, help="Lookback in years (max 50)")
    args = parser.parse_args()

    init_db()
    session = get_session()
    try:
        service = create_benchmark_service(session, settings)
        calendar = service.returns_calendar(args.symbol, args.years)
    finally:
        session.close()

    print(f"\nRETURNS CALENDAR: {calendar.symbol} ({calendar.status.value})")
    print("=" * 100)
    print("Year  " + " ".join(f"{m:>6}" for m in MONTHS) + "  Annual")
    print("-" * 100)
    for row in calendar.rows:
        print(f"{row.year}  " + " ".join(fmt(v) for v in row.months) + f"  {fmt(row.annual)}")
    print("-" * 100)
    print("Avg   " + " ".join(fmt(v) for v in calendar.average) + f"  {fmt(calendar.avg_annual)}")
    print("Med   " + " ".join(fmt(v) for v in calendar.median))


if __name__ == "__main__":
    main()
