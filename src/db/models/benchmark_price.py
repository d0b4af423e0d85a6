"""Benchmark price model for cached daily closes."""

from sqlalchemy import Column, String, Date, Float, DateTime, Index, func
from ..base import Base


class BenchmarkPrice(Base):
    """Cached daily closing prices for benchmark indices and ETFs.

    One row per (symbol, date). Rows are written with
    insert-on-conflict-do-nothing and never updated afterwards.
    """
    __tablename__ = "benchmark_prices"

    symbol = Column(String(20), primary_key=True)
    date = Column(Date, primary_key=True)
    close = Column(Float, nullable=False)

    # Metadata
    fetched_at = Column(DateTime, server_default=func.now())
    source = Column(String(50), default="yfinance")

    __table_args__ = (
        Index('idx_benchmark_prices_date', 'date'),
    )
