"""Exceptions raised by the benchmark cache and its collaborators."""

from datetime import date
from typing import Optional


class BenchmarkCacheError(Exception):
    """Base class for benchmark cache failures."""


class InvalidRangeError(BenchmarkCacheError, ValueError):
    """Raised for an empty symbol, a malformed date or start > end."""


class UpstreamFetchError(BenchmarkCacheError):
    """Raised when the market-data provider call fails.

    Covers network errors, timeouts and payloads without close prices.
    """

    def __init__(
        self,
        symbol: str,
        start: Optional[date],
        end: Optional[date],
        message: str,
    ):
        self.symbol = symbol
        self.start = start
        self.end = end
        self.message = message
        super().__init__(f"{symbol} [{start} .. {end}]: {message}")


class PersistenceError(BenchmarkCacheError):
    """Raised when the store rejects a read or write."""
