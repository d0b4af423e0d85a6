"""Repository for stored daily exchange rates."""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.benchmark.errors import PersistenceError
from src.db.models.exchange_rate import ExchangeRate


class ExchangeRateRepository:
    """Reads and writes rows of ``exchange_rates``."""

    def __init__(self, session: Session):
        self.session = session

    def get_for_date(self, rate_date: date) -> Optional[float]:
        """Stored rate for a day, or None."""
        try:
            row = self.session.get(ExchangeRate, rate_date)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read exchange rate for {rate_date}: {e}") from e
        return float(row.rate) if row else None

    def get_latest(self) -> Optional[float]:
        """Most recently dated stored rate, or None."""
        stmt = select(ExchangeRate.rate).order_by(ExchangeRate.date.desc()).limit(1)
        try:
            rate = self.session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Could not read latest exchange rate: {e}") from e
        return float(rate) if rate is not None else None

    def save(self, rate_date: date, rate: float, commit: bool = True) -> None:
        """Store a rate for a day, replacing any existing value."""
        try:
            self.session.merge(ExchangeRate(date=rate_date, rate=rate))
            if commit:
                self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise PersistenceError(f"Could not store exchange rate for {rate_date}: {e}") from e
