"""Exchange-rate cache with its own TTL and last-fetch timestamp."""

import logging
from datetime import date, datetime, timedelta
from functools import partial
from typing import Callable, Optional

from sqlalchemy.orm import Session

from src.config.settings import Settings, get_settings
from src.db.repositories.fx_repo import ExchangeRateRepository

from .provider import fetch_latest_rate

logger = logging.getLogger(__name__)


class ExchangeRateCache:
    """
    USD/KRW rate lookup layered as memory -> today's stored row -> upstream.

    One instance is constructed per application and passed to whatever
    needs conversions.
    """

    def __init__(
        self,
        fetch_rate: Callable[[], float],
        repository: ExchangeRateRepository,
        ttl: timedelta = timedelta(hours=1),
        default_rate: float = 1350.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the cache.

        Args:
            fetch_rate: Returns the latest upstream rate, raising on failure
            repository: Stored daily rates
            ttl: How long a rate held in memory stays valid
            default_rate: Used when upstream and storage both have nothing
            clock: Returns the current time
        """
        self.fetch_rate = fetch_rate
        self.repository = repository
        self.ttl = ttl
        self.default_rate = default_rate
        self.clock = clock

        self._rate: Optional[float] = None
        self._fetched_at: Optional[datetime] = None

    @property
    def fetched_at(self) -> Optional[datetime]:
        return self._fetched_at

    def _remember(self, rate: float, now: datetime) -> float:
        self._rate = rate
        self._fetched_at = now
        return rate

    def is_fresh(self) -> bool:
        """Whether the in-memory rate is younger than the TTL."""
        if self._rate is None or self._fetched_at is None:
            return False
        return self.clock() - self._fetched_at < self.ttl

    def get_rate(self) -> float:
        """
        Current KRW per USD.

        Returns:
            In-memory rate while fresh, else today's stored rate, else a
            newly fetched rate (stored for today). If the fetch fails, the
            last known rate or the default.
        """
        if self.is_fresh():
            return self._rate

        now = self.clock()
        today: date = now.date()

        stored = self.repository.get_for_date(today)
        if stored is not None:
            return self._remember(stored, now)

        try:
            rate = self.fetch_rate()
        except Exception as e:
            fallback = self._rate or self.repository.get_latest() or self.default_rate
            logger.warning(f"Exchange rate fetch failed, using {fallback}: {e}")
            return fallback

        self.repository.save(today, rate)
        logger.info(f"Exchange rate for {today}: {rate}")
        return self._remember(rate, now)

    def invalidate(self) -> None:
        """Drop the in-memory rate so the next lookup goes to storage."""
        self._rate = None
        self._fetched_at = None

    def usd_to_krw(self, amount: float) -> float:
        return amount * self.get_rate()

    def krw_to_usd(self, amount: float) -> float:
        return amount / self.get_rate()


def create_exchange_rate_cache(
    session: Session,
    settings: Optional[Settings] = None,
) -> ExchangeRateCache:
    """Wire an ExchangeRateCache from settings with the Yahoo quote source."""
    settings = settings or get_settings()
    return ExchangeRateCache(
        fetch_rate=partial(
            fetch_latest_rate, settings.fx_symbol, settings.fetch_timeout_seconds
        ),
        repository=ExchangeRateRepository(session),
        ttl=timedelta(seconds=settings.fx_ttl_seconds),
        default_rate=settings.fx_default_rate,
    )
