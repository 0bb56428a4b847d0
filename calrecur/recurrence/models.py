"""Data models for recurrence rule configuration."""

from datetime import date
from enum import IntEnum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import InvalidArgumentError


class Frequency(IntEnum):
    """Base period of repetition."""

    DAILY = 0
    WEEKLY = 1
    MONTHLY = 2
    YEARLY = 3

    @classmethod
    def parse(
        cls, value: Union["Frequency", int, str], message: str = "Invalid frequency value provided"
    ) -> "Frequency":
        """Resolve a frequency from a member, its integer value or its name.

        Args:
            value: Frequency member, integer constant or case-insensitive name
            message: Error message used when the value is rejected

        Returns:
            Matching Frequency member

        Raises:
            InvalidArgumentError: If the value names no frequency
        """
        return _parse_member(cls, value, message)


class Weekday(IntEnum):
    """Day of the week, numbered from Sunday."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def parse(
        cls, value: Union["Weekday", int, str], message: str = "Invalid weekday provided"
    ) -> "Weekday":
        """Resolve a weekday from a member, integer, full name or two-letter code.

        Args:
            value: Weekday member, integer 0-6, name ("monday") or code ("MO")
            message: Error message used when the value is rejected

        Returns:
            Matching Weekday member

        Raises:
            InvalidArgumentError: If the value names no weekday
        """
        if isinstance(value, str) and len(value.strip()) == 2:
            code = value.strip().upper()
            for member in cls:
                if member.name.startswith(code):
                    return member
        return _parse_member(cls, value, message)

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Get the weekday of a calendar date."""
        # date.weekday() counts from Monday=0
        return cls((day.weekday() + 1) % 7)


def _parse_member(enum_cls, value, message):
    # bool is an int subclass; True must not pass as WEEKLY/MONDAY
    if isinstance(value, bool):
        raise InvalidArgumentError(message, value)

    if isinstance(value, enum_cls):
        return value

    if isinstance(value, str):
        name = value.strip().upper()
        if name in enum_cls.__members__:
            return enum_cls[name]
        try:
            value = int(name)
        except ValueError:
            raise InvalidArgumentError(message, value) from None

    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        raise InvalidArgumentError(message, value) from None


class RuleDefinition(BaseModel):
    """Plain-data description of a recurrence rule, as loaded from YAML or JSON."""

    frequency: Optional[Union[int, str]] = Field(
        default=None, description="daily, weekly, monthly, yearly or 0-3"
    )
    interval: int = Field(default=1, description="Repeat every N periods")
    week_start_day: Optional[Union[int, str]] = Field(
        default=None, description="Weekday name or 0 (Sunday) - 6 (Saturday)"
    )
    until: Optional[date] = Field(default=None, description="Inclusive end date")
    anchor: Optional[date] = Field(default=None, description="First period for interval counting")

    days: List[int] = Field(default_factory=list, description="Days of the month")
    day_frequency: List[int] = Field(
        default_factory=list, description="Ordinal of the weekday within the period (0-6)"
    )
    weekdays: List[Union[int, str]] = Field(
        default_factory=list, description="Weekdays for the Nth-weekday constraint"
    )
    months: List[int] = Field(default_factory=list, description="Months of the year (1-12)")
    month_days: List[int] = Field(
        default_factory=list, description="Positional days of the month (1..31, -31..-1)"
    )
    week_numbers: List[int] = Field(
        default_factory=list, description="ISO week numbers (1..53, -53..-1)"
    )
    year_days: List[int] = Field(
        default_factory=list, description="Positional days of the year (1..366, -366..-1)"
    )

    model_config = ConfigDict(extra="forbid")
