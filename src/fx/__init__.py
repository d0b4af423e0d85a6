"""FX module - USD/KRW exchange rate with an explicit TTL cache."""

from .rate_cache import ExchangeRateCache

__all__ = ["ExchangeRateCache"]
