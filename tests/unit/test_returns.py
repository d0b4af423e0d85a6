"""Unit tests for return normalization and the returns calendar."""

import pytest
from datetime import date

from src.benchmark.models import PricePoint
from src.benchmark.returns import (
    build_returns_calendar,
    closes_to_return_pct,
    normalize_to_return_pct,
)


def pp(day: str, close: float) -> PricePoint:
    return PricePoint(date=date.fromisoformat(day), close=close)


class TestNormalizeToReturnPct:
    """Tests for cumulative return normalization."""

    def test_empty_series(self) -> None:
        assert normalize_to_return_pct([]) == []

    def test_zero_base_yields_empty(self) -> None:
        points = [(date(2020, 1, 1), 0.0), (date(2020, 1, 2), 10.0)]
        assert normalize_to_return_pct(points) == []

    def test_returns_relative_to_first_point(self) -> None:
        points = [(date(2020, 1, 1), 100.0), (date(2020, 1, 2), 110.0)]

        result = normalize_to_return_pct(points)

        assert [(r.date, r.return_pct) for r in result] == [
            (date(2020, 1, 1), 0.0),
            (date(2020, 1, 2), pytest.approx(10.0)),
        ]

    def test_negative_returns(self) -> None:
        result = normalize_to_return_pct([(date(2020, 1, 1), 200.0), (date(2020, 1, 2), 150.0)])
        assert result[1].return_pct == pytest.approx(-25.0)

    def test_closes_shortcut(self) -> None:
        result = closes_to_return_pct([pp("2024-01-02", 50.0), pp("2024-01-03", 55.0)])
        assert result[-1].return_pct == pytest.approx(10.0)


class TestReturnsCalendar:
    """Tests for the year x month returns grid."""

    @pytest.fixture
    def points(self):
        return [
            pp("2023-01-02", 100.0),
            pp("2023-01-31", 110.0),
            pp("2023-02-01", 110.0),
            pp("2023-02-28", 99.0),
            pp("2024-01-02", 200.0),
            pp("2024-01-15", 205.0),
            pp("2024-01-31", 210.0),
        ]

    def test_empty_input(self) -> None:
        calendar = build_returns_calendar([], symbol="^GSPC")

        assert calendar.symbol == "^GSPC"
        assert calendar.rows == []
        assert calendar.average == [None] * 12
        assert calendar.median == [None] * 12
        assert calendar.avg_annual is None

    def test_rows_sorted_descending(self, points) -> None:
        calendar = build_returns_calendar(points)
        assert [r.year for r in calendar.rows] == [2024, 2023]

    def test_monthly_returns(self, points) -> None:
        calendar = build_returns_calendar(points)
        row_2023 = calendar.rows[1]

        assert row_2023.months[0] == pytest.approx(10.0)
        assert row_2023.months[1] == pytest.approx(-10.0)
        assert row_2023.months[2:] == [None] * 10

    def test_annual_returns(self, points) -> None:
        calendar = build_returns_calendar(points)

        assert calendar.rows[0].annual == pytest.approx(5.0)
        assert calendar.rows[1].annual == pytest.approx(-1.0)
        assert calendar.avg_annual == pytest.approx(2.0)

    def test_average_and_median(self, points) -> None:
        calendar = build_returns_calendar(points)

        assert calendar.average[0] == pytest.approx(7.5)
        assert calendar.median[0] == pytest.approx(7.5)
        assert calendar.average[1] == pytest.approx(-10.0)
        assert calendar.average[5] is None

    def test_median_with_odd_count(self) -> None:
        points = [
            pp("2021-03-01", 100.0), pp("2021-03-31", 101.0),
            pp("2022-03-01", 100.0), pp("2022-03-31", 110.0),
            pp("2023-03-01", 100.0), pp("2023-03-31", 103.0),
        ]
        calendar = build_returns_calendar(points)

        assert calendar.median[2] == pytest.approx(3.0)
        assert calendar.average[2] == pytest.approx(14.0 / 3)

    def test_year_without_january_has_no_annual(self) -> None:
        calendar = build_returns_calendar([pp("2022-03-01", 100.0), pp("2022-03-31", 105.0)])

        assert calendar.rows[0].months[2] == pytest.approx(5.0)
        assert calendar.rows[0].annual is None
        assert calendar.avg_annual is None

    def test_unsorted_input(self, points) -> None:
        calendar = build_returns_calendar(list(reversed(points)))
        assert calendar.rows[1].months[0] == pytest.approx(10.0)
