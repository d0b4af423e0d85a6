"""Shared fixtures: in-memory SQLite sessions and a scripted price provider."""

from datetime import date
from typing import Dict, List, Optional, Tuple

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.db.base import Base
from src.db import models  # noqa: F401
from src.benchmark.errors import UpstreamFetchError
from src.benchmark.models import PricePoint


class FakeProvider:
    """In-memory provider that records every requested range."""

    source = "fake"

    def __init__(self, closes: Optional[Dict[str, Dict[date, float]]] = None):
        self.closes = closes or {}
        self.calls: List[Tuple[str, date, date]] = []
        self.fail = False

    def fetch_history(self, symbol: str, start: date, end: date) -> List[PricePoint]:
        self.calls.append((symbol, start, end))
        if self.fail:
            raise UpstreamFetchError(symbol, start, end, "connection refused")
        series = self.closes.get(symbol, {})
        return [
            PricePoint(date=d, close=c)
            for d, c in sorted(series.items())
            if start <= d <= end
        ]


@pytest.fixture
def engine():
    eng = create_engine("sqlite://")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    db = sessionmaker(bind=engine, expire_on_commit=False)()
    yield db
    db.close()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
