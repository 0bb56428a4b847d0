"""Positional day resolution within a month or a year.

Positions are 1-based from the start of the period, or negative to count back
from its end (-1 is the last day). A position the period does not have, such
as day 31 of April or day -366 of a common year, resolves to ``None``.
"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.relativedelta import relativedelta

from .exceptions import RecurrenceRangeError

MAX_MONTH_DAY = 31
MAX_YEAR_DAY = 366


def _reject_zero(position: int, period: str) -> None:
    if position == 0:
        raise RecurrenceRangeError(f"Day of the {period} cannot be 0", position)


def resolve_day_of_month(position: int, month: int, year: int) -> Optional[date]:
    """Resolve the date at a position within a month.

    Args:
        position: 1..31 from the first day, -31..-1 from the last day
        month: Month number (1-12)
        year: Four-digit year

    Returns:
        The resolved date, or None if the month has no such day

    Raises:
        RecurrenceRangeError: If position is 0
    """
    position = int(position)
    _reject_zero(position, "month")
    if abs(position) > MAX_MONTH_DAY:
        return None

    first = date(year, month, 1)
    if position > 0:
        resolved = first + timedelta(days=position - 1)
    else:
        last = first + relativedelta(day=31)
        resolved = last + timedelta(days=position + 1)

    if resolved.month != month or resolved.year != year:
        return None
    return resolved


def resolve_day_of_year(position: int, year: int) -> Optional[date]:
    """Resolve the date at a position within a year.

    Args:
        position: 1..366 from January 1st, -366..-1 from December 31st
        year: Four-digit year

    Returns:
        The resolved date, or None if the year has no such day

    Raises:
        RecurrenceRangeError: If position is 0
    """
    position = int(position)
    _reject_zero(position, "year")
    if abs(position) > MAX_YEAR_DAY:
        return None

    if position > 0:
        resolved = date(year, 1, 1) + timedelta(days=position - 1)
    else:
        resolved = date(year, 12, 31) + timedelta(days=position + 1)

    if resolved.year != year:
        return None
    return resolved


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


class DayOfTheMonth:
    """Predicate matching one positional day in whichever month it is asked about."""

    def __init__(self, position: int):
        position = int(position)
        _reject_zero(position, "month")
        self.position = position

    def resolve(self, month: int, year: int) -> Optional[date]:
        return resolve_day_of_month(self.position, month, year)

    def contains(self, day: Union[date, datetime]) -> bool:
        day = _as_date(day)
        return self.resolve(day.month, day.year) == day

    def __repr__(self) -> str:
        return f"DayOfTheMonth({self.position})"


class DayOfTheYear:
    """Predicate matching one positional day in whichever year it is asked about."""

    def __init__(self, position: int):
        position = int(position)
        _reject_zero(position, "year")
        self.position = position

    def resolve(self, year: int) -> Optional[date]:
        return resolve_day_of_year(self.position, year)

    def contains(self, day: Union[date, datetime]) -> bool:
        day = _as_date(day)
        return self.resolve(day.year) == day

    def __repr__(self) -> str:
        return f"DayOfTheYear({self.position})"
