"""Repository for the benchmark price cache table."""

import logging
from datetime import date
from typing import Iterable, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.benchmark.errors import PersistenceError
from src.benchmark.models import PricePoint
from src.db.models.benchmark_price import BenchmarkPrice

logger = logging.getLogger(__name__)

# Dialects whose insert() supports ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class BenchmarkPriceRepository:
    """Reads and idempotent writes against ``benchmark_prices``."""

    # Rows per INSERT statement; keeps bound parameters under old SQLite limits
    batch_size = 200

    def __init__(self, session: Session):
        self.session = session

    def get_bounds(self, symbol: str) -> Tuple[Optional[date], Optional[date]]:
        """
        Get the earliest and latest cached date for a symbol.

        Args:
            symbol: Benchmark symbol

        Returns:
            (min_date, max_date), both None when nothing is cached
        """
        stmt = select(
            func.min(BenchmarkPrice.date),
            func.max(BenchmarkPrice.date),
        ).where(BenchmarkPrice.symbol == symbol)

        try:
            min_date, max_date = self.session.execute(stmt).one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read cache bounds for {symbol}: {e}") from e

        return min_date, max_date

    def get_series(self, symbol: str, start: date, end: date) -> List[PricePoint]:
        """
        Get cached closes for a symbol within a date range.

        Args:
            symbol: Benchmark symbol
            start: Start date (inclusive)
            end: End date (inclusive)

        Returns:
            Points ordered by date ascending
        """
        stmt = (
            select(BenchmarkPrice.date, BenchmarkPrice.close)
            .where(
                BenchmarkPrice.symbol == symbol,
                BenchmarkPrice.date >= start,
                BenchmarkPrice.date <= end,
            )
            .order_by(BenchmarkPrice.date)
        )

        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read cached series for {symbol}: {e}") from e

        return [PricePoint(date=d, close=float(c)) for d, c in rows]

    def insert_ignore(
        self,
        symbol: str,
        points: Iterable[PricePoint],
        source: str = "yfinance",
        commit: bool = True,
    ) -> int:
        """
        Store closes, leaving existing (symbol, date) rows untouched.

        Args:
            symbol: Benchmark symbol
            points: Closes to store
            source: Provider name recorded on new rows
            commit: Whether to commit transaction

        Returns:
            Number of rows actually inserted
        """
        values = [
            {"symbol": symbol, "date": p.date, "close": p.close, "source": source}
            for p in points
        ]
        if not values:
            return 0

        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise PersistenceError(f"Upsert is not supported on dialect '{dialect}'")

        inserted = 0
        try:
            for i in range(0, len(values), self.batch_size):
                batch = values[i:i + self.batch_size]
                stmt = insert(BenchmarkPrice).values(batch).on_conflict_do_nothing(
                    index_elements=["symbol", "date"],
                )
                result = self.session.execute(stmt)
                # rowcount is -1 where the driver cannot report it
                inserted += result.rowcount if result.rowcount >= 0 else len(batch)
            if commit:
                self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Could not store closes for {symbol}: {e}") from e

        logger.debug(f"Stored {inserted}/{len(values)} closes for {symbol}")
        return inserted
