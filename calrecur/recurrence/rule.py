"""Recurrence rule state with validated mutation."""

import logging
from datetime import date
from typing import Any, FrozenSet, Iterator, List, Optional, Set, Union

from .engine import DateLike, RecurrenceEngine, as_date
from .exceptions import InvalidArgumentError, RecurrenceRangeError
from .models import Frequency, RuleDefinition, Weekday

logger = logging.getLogger(__name__)


class RecurrenceRule:
    """Configuration describing which calendar dates are occurrences of an event.

    A rule starts empty and is populated through the add/remove/set methods in
    any order. Every constraint set is unordered and free of duplicates, and an
    empty set leaves its dimension unconstrained. Constraint dimensions combine
    with AND semantics in ``contains``.

    A rule is not safe for concurrent mutation. Once configured it can be
    queried from several threads at once.
    """

    def __init__(self, engine: Optional[RecurrenceEngine] = None):
        """Initialize an empty rule.

        Args:
            engine: Engine used for contains/get_occurrences; an engine built
                from the global settings when omitted
        """
        self._engine = engine

        self._frequency: Optional[Frequency] = None
        self._interval = 1
        self._week_start_day: Optional[Weekday] = None
        self._until: Optional[date] = None
        self._anchor: Optional[date] = None
        self._event: Any = None

        self._days: Set[int] = set()
        self._day_frequency: Set[int] = set()
        self._weekdays: Set[Weekday] = set()
        self._months: Set[int] = set()
        self._month_days: Set[int] = set()
        self._week_numbers: Set[int] = set()
        self._year_days: Set[int] = set()

    # Owning event

    def set_event(self, event: Any) -> None:
        """Associate the owning event; the rule keeps a plain reference only."""
        self._event = event

    def get_event(self) -> Any:
        return self._event

    # Days of the month

    def get_days(self) -> FrozenSet[int]:
        return frozenset(self._days)

    def add_day(self, day: int) -> None:
        self._days.add(int(day))

    def remove_day(self, day: int) -> None:
        self._days.discard(int(day))

    # Ordinal of the weekday within the period

    def get_day_frequency(self) -> FrozenSet[int]:
        return frozenset(self._day_frequency)

    def add_day_frequency(self, frequency: int) -> None:
        """Add an ordinal (0-6) selecting which week of the period matches.

        0 matches every week; 2 with a monthly frequency and Monday in the
        weekdays means the second Monday of the month.

        Raises:
            RecurrenceRangeError: If the ordinal is outside 0-6
        """
        frequency = int(frequency)
        if frequency > 6 or frequency < 0:
            logger.debug("Rejected day frequency %d", frequency)
            raise RecurrenceRangeError(
                "Day frequency cannot be less than 0 or greater than 6", frequency
            )
        self._day_frequency.add(frequency)

    def remove_day_frequency(self, frequency: int) -> None:
        self._day_frequency.discard(int(frequency))

    # Weekdays for the Nth-weekday constraint

    def get_weekdays(self) -> FrozenSet[Weekday]:
        return frozenset(self._weekdays)

    def add_weekday(self, weekday: Union[Weekday, int, str]) -> None:
        """Add a weekday (0 Sunday - 6 Saturday, or a name) to the weekday constraint.

        Raises:
            InvalidArgumentError: If the value is not a weekday
        """
        self._weekdays.add(Weekday.parse(weekday))

    def remove_weekday(self, weekday: Union[Weekday, int, str]) -> None:
        self._weekdays.discard(Weekday.parse(weekday))

    # Months

    def get_months(self) -> FrozenSet[int]:
        return frozenset(self._months)

    def add_month(self, month: int) -> None:
        self._months.add(int(month))

    def remove_month(self, month: int) -> None:
        self._months.discard(int(month))

    # Positional days of the month

    def get_month_days(self) -> FrozenSet[int]:
        return frozenset(self._month_days)

    def add_month_day(self, day: int) -> None:
        """Add a positional month day: 1..31 from the start, -1..-31 from the end.

        Raises:
            RecurrenceRangeError: If the day is 0 or outside -31..31
        """
        day = int(day)
        if day > 31 or day < -31 or day == 0:
            logger.debug("Rejected month day %d", day)
            raise RecurrenceRangeError("Month day must be between -1 to -31 or 1 to 31", day)
        self._month_days.add(day)

    def remove_month_day(self, day: int) -> None:
        self._month_days.discard(int(day))

    # ISO week numbers

    def get_week_numbers(self) -> FrozenSet[int]:
        return frozenset(self._week_numbers)

    def add_week_number(self, week: int) -> None:
        self._week_numbers.add(int(week))

    def remove_week_number(self, week: int) -> None:
        self._week_numbers.discard(int(week))

    # Positional days of the year

    def get_year_days(self) -> FrozenSet[int]:
        return frozenset(self._year_days)

    def add_year_day(self, day: int) -> None:
        self._year_days.add(int(day))

    def remove_year_day(self, day: int) -> None:
        self._year_days.discard(int(day))

    # Scalar settings

    def set_frequency(self, frequency: Union[Frequency, int, str]) -> None:
        """Set the base period of repetition.

        Raises:
            InvalidArgumentError: If the value is not daily, weekly, monthly or yearly
        """
        self._frequency = Frequency.parse(frequency, "Invalid frequency value provided")

    def get_frequency(self) -> Optional[Frequency]:
        return self._frequency

    def set_interval(self, interval: int) -> None:
        """Set how many periods pass between occurrences; negative values are made positive."""
        self._interval = abs(int(interval))

    def get_interval(self) -> int:
        return self._interval

    def set_until(self, until: Optional[DateLike]) -> None:
        """Set the inclusive end date, or clear it with None."""
        self._until = None if until is None else as_date(until)

    def get_until(self) -> Optional[date]:
        return self._until

    def set_anchor(self, anchor: Optional[DateLike]) -> None:
        """Set the date whose period is the first one counted by the interval."""
        self._anchor = None if anchor is None else as_date(anchor)

    def get_anchor(self) -> Optional[date]:
        return self._anchor

    def set_week_start_day(self, day: Union[Weekday, int, str]) -> None:
        """Set the first day of the week.

        Raises:
            InvalidArgumentError: If the value is not a weekday
        """
        self._week_start_day = Weekday.parse(day, "Invalid week start day provided")

    def get_week_start_day(self) -> Optional[Weekday]:
        return self._week_start_day

    # Evaluation

    @property
    def engine(self) -> RecurrenceEngine:
        """Engine bound to this rule, built from the global settings on first use."""
        if self._engine is None:
            self._engine = RecurrenceEngine()
        return self._engine

    def contains(self, day: DateLike) -> bool:
        """Check whether a date is an occurrence of this rule."""
        return self.engine.contains(self, day)

    def get_occurrences(
        self, start: Optional[DateLike] = None, end: Optional[DateLike] = None
    ) -> List[date]:
        """List occurrences from start (inclusive) to end (exclusive).

        When end is omitted the until date is used instead.

        Raises:
            InvalidArgumentError: If start is missing, or both end and until are
            OccurrenceLimitError: If the window holds more occurrences than allowed
        """
        return self.engine.get_occurrences(self, start, end)

    def iter_occurrences(
        self, start: Optional[DateLike] = None, end: Optional[DateLike] = None
    ) -> Iterator[date]:
        """Lazily yield occurrences from start (inclusive) to end (exclusive)."""
        return self.engine.iter_occurrences(self, start, end)

    # Plain-data conversion

    @classmethod
    def from_definition(
        cls, definition: RuleDefinition, engine: Optional[RecurrenceEngine] = None
    ) -> "RecurrenceRule":
        """Build a rule from a definition, applying the same validation as the setters.

        Args:
            definition: Parsed rule definition
            engine: Optional engine for the new rule

        Returns:
            Configured RecurrenceRule

        Raises:
            RecurrenceRangeError: If a positional or ordinal value is out of range
            InvalidArgumentError: If an enum value is invalid
        """
        rule = cls(engine)

        if definition.frequency is not None:
            rule.set_frequency(definition.frequency)
        if definition.week_start_day is not None:
            rule.set_week_start_day(definition.week_start_day)
        rule.set_interval(definition.interval)
        rule.set_until(definition.until)
        rule.set_anchor(definition.anchor)

        for day in definition.days:
            rule.add_day(day)
        for ordinal in definition.day_frequency:
            rule.add_day_frequency(ordinal)
        for weekday in definition.weekdays:
            rule.add_weekday(weekday)
        for month in definition.months:
            rule.add_month(month)
        for month_day in definition.month_days:
            rule.add_month_day(month_day)
        for week in definition.week_numbers:
            rule.add_week_number(week)
        for year_day in definition.year_days:
            rule.add_year_day(year_day)

        return rule

    def to_definition(self) -> RuleDefinition:
        """Describe this rule as plain data, with enum names and sorted lists."""
        return RuleDefinition(
            frequency=self._frequency.name.lower() if self._frequency is not None else None,
            interval=self._interval,
            week_start_day=(
                self._week_start_day.name.lower() if self._week_start_day is not None else None
            ),
            until=self._until,
            anchor=self._anchor,
            days=sorted(self._days),
            day_frequency=sorted(self._day_frequency),
            weekdays=[weekday.name.lower() for weekday in sorted(self._weekdays)],
            months=sorted(self._months),
            month_days=sorted(self._month_days),
            week_numbers=sorted(self._week_numbers),
            year_days=sorted(self._year_days),
        )

    def __repr__(self) -> str:
        frequency = self._frequency.name if self._frequency is not None else None
        return (
            f"RecurrenceRule(frequency={frequency}, interval={self._interval}, "
            f"until={self._until}, months={sorted(self._months)}, days={sorted(self._days)}, "
            f"month_days={sorted(self._month_days)}, year_days={sorted(self._year_days)}, "
            f"week_numbers={sorted(self._week_numbers)}, "
            f"weekdays={[w.name for w in sorted(self._weekdays)]}, "
            f"day_frequency={sorted(self._day_frequency)})"
        )
