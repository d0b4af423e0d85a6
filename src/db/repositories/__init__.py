"""Session-bound repositories."""

from .benchmark_repo import BenchmarkPriceRepository
from .fx_repo import ExchangeRateRepository

__all__ = ["BenchmarkPriceRepository", "ExchangeRateRepository"]
