"""ORM models."""

from .benchmark_price import BenchmarkPrice
from .exchange_rate import ExchangeRate

__all__ = ["BenchmarkPrice", "ExchangeRate"]
