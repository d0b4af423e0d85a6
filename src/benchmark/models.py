"""Pydantic models for the benchmark module."""

import datetime as dt
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """Closing price of a symbol on one trading day."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    close: float


class ReturnPoint(BaseModel):
    """Cumulative return relative to the first point of a series."""

    model_config = ConfigDict(frozen=True)

    date: dt.date
    return_pct: float = Field(description="(value - base) / base * 100")


class SeriesStatus(str, Enum):
    """Outcome of a cache-backed series lookup."""

    FRESH = "fresh"
    STALE = "stale"
    FAILED = "failed"


class SeriesResult(BaseModel):
    """Cached series for a symbol together with how it was obtained."""

    symbol: str
    start: dt.date
    end: dt.date
    status: SeriesStatus
    points: List[PricePoint] = Field(default_factory=list)
    error: Optional[str] = Field(
        default=None,
        description="Upstream error message when status is stale or failed",
    )

    @property
    def is_fresh(self) -> bool:
        return self.status == SeriesStatus.FRESH


class ReturnSeries(BaseModel):
    """Return-% series for one symbol, as charted by the dashboard."""

    name: str
    symbol: str
    status: SeriesStatus
    points: List[ReturnPoint] = Field(default_factory=list)


class ReturnsCalendarRow(BaseModel):
    """Monthly returns of one calendar year."""

    year: int
    months: List[Optional[float]] = Field(
        description="Twelve monthly returns in percent, None where no data"
    )
    annual: Optional[float] = None


class ReturnsCalendar(BaseModel):
    """Year-by-month return grid with per-month statistics."""

    symbol: str = ""
    status: SeriesStatus = SeriesStatus.FRESH
    rows: List[ReturnsCalendarRow] = Field(default_factory=list)
    average: List[Optional[float]] = Field(default_factory=lambda: [None] * 12)
    median: List[Optional[float]] = Field(default_factory=lambda: [None] * 12)
    avg_annual: Optional[float] = None


class PerformanceComparison(BaseModel):
    """Subject series compared against named benchmarks."""

    start: dt.date
    end: dt.date
    subject: Optional[ReturnSeries] = None
    benchmarks: Dict[str, ReturnSeries] = Field(default_factory=dict)
