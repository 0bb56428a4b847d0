"""Recurrence rule matching and occurrence enumeration."""

from .engine import RecurrenceEngine
from .exceptions import (
    InvalidArgumentError,
    OccurrenceLimitError,
    RecurrenceError,
    RecurrenceRangeError,
    UnexpectedValueError,
)
from .models import Frequency, RuleDefinition, Weekday
from .positional import DayOfTheMonth, DayOfTheYear, resolve_day_of_month, resolve_day_of_year
from .rule import RecurrenceRule

__all__ = [
    "DayOfTheMonth",
    "DayOfTheYear",
    "Frequency",
    "InvalidArgumentError",
    "OccurrenceLimitError",
    "RecurrenceEngine",
    "RecurrenceError",
    "RecurrenceRangeError",
    "RecurrenceRule",
    "RuleDefinition",
    "UnexpectedValueError",
    "Weekday",
    "resolve_day_of_month",
    "resolve_day_of_year",
]
