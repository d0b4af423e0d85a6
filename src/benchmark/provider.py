"""Historical daily closes from Yahoo Finance."""

import logging
import time
from datetime import date, timedelta
from typing import Callable, List, Optional, Protocol

import pandas as pd
import yfinance as yf
from yfinance.exceptions import YFPricesMissingError

from .errors import UpstreamFetchError
from .models import PricePoint

logger = logging.getLogger(__name__)


class BenchmarkProvider(Protocol):
    """Anything that can return daily closes for a symbol and date range."""

    def fetch_history(self, symbol: str, start: date, end: date) -> List[PricePoint]:
        ...


class YahooBenchmarkProvider:
    """Fetch daily closes with ``yfinance``, with timeout and bounded retry.

    Yahoo silently truncates very long ranges; callers are expected to
    split requests (see ``split_date_range``).
    """

    source = "yfinance"

    def __init__(
        self,
        timeout: float = 20.0,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the provider.

        Args:
            timeout: Seconds allowed for one HTTP request
            max_attempts: Attempts per range before raising
            backoff_seconds: Base delay, doubled after each failed attempt
            sleep: Sleep function (injectable for tests)
        """
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep
        # Otherwise yfinance logs failures and returns an empty frame
        yf.config.debug.hide_exceptions = False

    def fetch_history(self, symbol: str, start: date, end: date) -> List[PricePoint]:
        """
        Fetch closes for ``symbol`` between ``start`` and ``end`` inclusive.

        Args:
            symbol: Yahoo Finance symbol (e.g., "^GSPC", "XLK")
            start: First date (inclusive)
            end: Last date (inclusive)

        Returns:
            Points ordered by date, empty when the range has no trading days

        Raises:
            UpstreamFetchError: If every attempt failed or the payload has no closes
        """
        last_error: Optional[Exception] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                hist = self._download(symbol, start, end)
            except YFPricesMissingError:
                # Weekend, holiday or pre-listing range: not a failure
                logger.info(f"No trading data for {symbol} between {start} and {end}")
                return []
            except Exception as e:
                last_error = e
                if attempt < self.max_attempts:
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.warning(
                        f"Fetch {symbol} {start}..{end} failed "
                        f"(attempt {attempt}/{self.max_attempts}, retrying in {wait_time:.1f}s): {e}"
                    )
                    self._sleep(wait_time)
                continue

            return self._to_points(symbol, start, end, hist)

        raise UpstreamFetchError(
            symbol, start, end,
            f"giving up after {self.max_attempts} attempts: {last_error}",
        ) from last_error

    def _download(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        # yfinance treats end as exclusive
        ticker = yf.Ticker(symbol)
        return ticker.history(
            start=start.isoformat(),
            end=(end + timedelta(days=1)).isoformat(),
            interval="1d",
            auto_adjust=False,
            actions=False,
            timeout=self.timeout,
        )

    def _to_points(
        self,
        symbol: str,
        start: date,
        end: date,
        hist: Optional[pd.DataFrame],
    ) -> List[PricePoint]:
        if hist is None or hist.empty:
            logger.info(f"No trading data for {symbol} between {start} and {end}")
            return []

        if "Close" not in hist.columns:
            raise UpstreamFetchError(
                symbol, start, end,
                f"payload has no Close column (columns: {list(hist.columns)})",
            )

        closes = {}
        for ts, close in hist["Close"].items():
            if pd.isna(close):
                continue
            day = pd.Timestamp(ts).date()
            if start <= day <= end:
                closes[day] = float(close)

        points = [PricePoint(date=d, close=c) for d, c in sorted(closes.items())]
        logger.debug(f"Fetched {len(points)} closes for {symbol} ({start}..{end})")
        return points
