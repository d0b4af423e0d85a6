"""Daily USD/KRW exchange rate model."""

from sqlalchemy import Column, Date, Float, DateTime, func
from ..base import Base


class ExchangeRate(Base):
    """One stored exchange rate per calendar day (KRW per USD)."""
    __tablename__ = "exchange_rates"

    date = Column(Date, primary_key=True)
    rate = Column(Float, nullable=False)
    fetched_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
