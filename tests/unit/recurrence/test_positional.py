"""Unit tests for positional day resolution within months and years."""

from datetime import date, datetime

import pytest

from calrecur.recurrence import (
    DayOfTheMonth,
    DayOfTheYear,
    RecurrenceRangeError,
    resolve_day_of_month,
    resolve_day_of_year,
)


class TestResolveDayOfMonth:
    """Test suite for resolve_day_of_month."""

    @pytest.mark.parametrize(
        ("position", "month", "year", "expected"),
        [
            (1, 1, 2024, date(2024, 1, 1)),
            (15, 6, 2024, date(2024, 6, 15)),
            (31, 1, 2024, date(2024, 1, 31)),
            (-1, 2, 2024, date(2024, 2, 29)),
            (-1, 2, 2023, date(2023, 2, 28)),
            (-1, 4, 2024, date(2024, 4, 30)),
            (-31, 1, 2024, date(2024, 1, 1)),
            (-29, 2, 2024, date(2024, 2, 1)),
        ],
    )
    def test_resolves_existing_positions(self, position, month, year, expected):
        """Test that positions present in the month resolve to the right date."""
        assert resolve_day_of_month(position, month, year) == expected

    @pytest.mark.parametrize(
        ("position", "month", "year"),
        [
            (31, 4, 2024),
            (30, 2, 2024),
            (29, 2, 2023),
            (-30, 2, 2024),
            (-31, 4, 2024),
            (32, 1, 2024),
            (-32, 1, 2024),
        ],
    )
    def test_missing_positions_resolve_to_none(self, position, month, year):
        """Test that positions the month does not have never spill into another month."""
        assert resolve_day_of_month(position, month, year) is None

    def test_zero_position_rejected(self):
        """Test that position 0 raises a range error."""
        with pytest.raises(RecurrenceRangeError) as exc_info:
            resolve_day_of_month(0, 1, 2024)

        assert exc_info.value.value == 0

    def test_resolved_date_stays_in_month(self):
        """Test that every valid position of every month stays in that month."""
        for month in range(1, 13):
            for position in list(range(1, 32)) + list(range(-31, 0)):
                resolved = resolve_day_of_month(position, month, 2024)
                if resolved is not None:
                    assert (resolved.year, resolved.month) == (2024, month)


class TestResolveDayOfYear:
    """Test suite for resolve_day_of_year."""

    @pytest.mark.parametrize(
        ("position", "year", "expected"),
        [
            (1, 2024, date(2024, 1, 1)),
            (60, 2024, date(2024, 2, 29)),
            (60, 2023, date(2023, 3, 1)),
            (366, 2024, date(2024, 12, 31)),
            (-1, 2023, date(2023, 12, 31)),
            (-365, 2023, date(2023, 1, 1)),
            (-366, 2024, date(2024, 1, 1)),
        ],
    )
    def test_resolves_existing_positions(self, position, year, expected):
        """Test that positions present in the year resolve to the right date."""
        assert resolve_day_of_year(position, year) == expected

    @pytest.mark.parametrize(("position", "year"), [(366, 2023), (-366, 2023), (367, 2024)])
    def test_missing_positions_resolve_to_none(self, position, year):
        """Test that positions beyond the year's length resolve to None."""
        assert resolve_day_of_year(position, year) is None

    def test_zero_position_rejected(self):
        """Test that position 0 raises a range error."""
        with pytest.raises(RecurrenceRangeError):
            resolve_day_of_year(0, 2024)


class TestPositionalPredicates:
    """Test suite for DayOfTheMonth and DayOfTheYear."""

    def test_last_day_of_month_contains(self):
        """Test that -1 matches the last day of each month only."""
        last_day = DayOfTheMonth(-1)

        assert last_day.contains(date(2024, 2, 29))
        assert last_day.contains(datetime(2024, 4, 30, 23, 59))
        assert not last_day.contains(date(2024, 2, 28))
        assert last_day.resolve(2, 2023) == date(2023, 2, 28)

    def test_day_of_year_contains(self):
        """Test that a year position matches one date per year."""
        leap_day = DayOfTheYear(60)

        assert leap_day.contains(date(2024, 2, 29))
        assert leap_day.contains(date(2023, 3, 1))
        assert not leap_day.contains(date(2024, 3, 1))

    @pytest.mark.parametrize("predicate_cls", [DayOfTheMonth, DayOfTheYear])
    def test_zero_rejected_at_construction(self, predicate_cls):
        """Test that predicates refuse position 0 up front."""
        with pytest.raises(RecurrenceRangeError):
            predicate_cls(0)

    def test_repr(self):
        """Test predicate repr shows the position."""
        assert repr(DayOfTheMonth(-1)) == "DayOfTheMonth(-1)"
        assert repr(DayOfTheYear(100)) == "DayOfTheYear(100)"
