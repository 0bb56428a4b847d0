"""Occurrence matching and enumeration for recurrence rules."""

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Tuple, Union

from ..config.settings import RecurrenceSettings, get_settings
from .constraints import ConstraintEvaluator
from .exceptions import InvalidArgumentError, OccurrenceLimitError
from .models import Weekday

if TYPE_CHECKING:
    from .rule import RecurrenceRule

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]

ONE_DAY = timedelta(days=1)


def as_date(value: DateLike) -> date:
    """Reduce a date or datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise InvalidArgumentError(f"Expected a date, got {type(value).__name__}", value)


class RecurrenceEngine:
    """Evaluates recurrence rules against calendar dates.

    A date is an occurrence when every constraint dimension accepts it.
    Enumeration walks a half-open date window one day at a time, so its cost
    grows with the window length; it suits bounded windows such as a month or
    a year of a calendar view.
    """

    def __init__(self, settings: Optional[RecurrenceSettings] = None):
        """Initialize RecurrenceEngine with settings.

        Args:
            settings: Recurrence settings; the global settings when omitted
        """
        self.settings = settings if settings is not None else get_settings()
        self.max_occurrences = getattr(self.settings, "max_occurrences", 10000)
        self.evaluator = ConstraintEvaluator(
            Weekday.parse(getattr(self.settings, "default_week_start_day", Weekday.MONDAY))
        )

    @property
    def dimensions(self) -> Tuple[Callable[["RecurrenceRule", date], bool], ...]:
        """Constraint checks combined by ``contains``, cheapest first."""
        evaluator = self.evaluator
        return (
            evaluator.on_until,
            evaluator.on_months,
            evaluator.on_days,
            evaluator.on_week_numbers,
            evaluator.on_month_days,
            evaluator.on_year_days,
            evaluator.on_day_frequency,
            evaluator.on_interval,
        )

    def contains(self, rule: "RecurrenceRule", day: DateLike) -> bool:
        """Check whether a date is an occurrence of the rule.

        Args:
            rule: Configured recurrence rule
            day: Candidate date; the time of a datetime is ignored

        Returns:
            True if every constraint dimension accepts the date
        """
        candidate = as_date(day)
        return all(check(rule, candidate) for check in self.dimensions)

    def _resolve_window(
        self, rule: "RecurrenceRule", start: Optional[DateLike], end: Optional[DateLike]
    ) -> Tuple[date, date]:
        if start is None:
            raise InvalidArgumentError("A start date is required to enumerate occurrences")

        if end is None:
            until = rule.get_until()
            if until is None:
                raise InvalidArgumentError(
                    "Cannot get occurrences on an infinite recurrence without using an end constraint."
                )
            end = until

        return as_date(start), as_date(end)

    def iter_occurrences(
        self,
        rule: "RecurrenceRule",
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> Iterator[date]:
        """Lazily yield occurrences in the window ``start <= day < end``.

        Arguments are checked immediately; dates are produced as the iterator
        is consumed, so a caller can stop at any point.

        Args:
            rule: Configured recurrence rule
            start: First date to test (inclusive)
            end: Date to stop at (exclusive); the rule's until date when omitted

        Returns:
            Iterator over matching dates in chronological order

        Raises:
            InvalidArgumentError: If start is missing, or end is missing and
                the rule has no until date
        """
        window_start, window_end = self._resolve_window(rule, start, end)
        return self._scan(rule, window_start, window_end)

    def _scan(self, rule: "RecurrenceRule", current: date, window_end: date) -> Iterator[date]:
        while current < window_end:
            if self.contains(rule, current):
                yield current
            current += ONE_DAY

    def get_occurrences(
        self,
        rule: "RecurrenceRule",
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> List[date]:
        """Collect every occurrence in the window ``start <= day < end``.

        Args:
            rule: Configured recurrence rule
            start: First date to test (inclusive)
            end: Date to stop at (exclusive); the rule's until date when omitted

        Returns:
            Matching dates in chronological order

        Raises:
            InvalidArgumentError: If start is missing, or end is missing and
                the rule has no until date
            OccurrenceLimitError: If more than ``max_occurrences`` dates match
        """
        window_start, window_end = self._resolve_window(rule, start, end)
        logger.debug(
            "Enumerating occurrences: window_start=%s window_end=%s rule=%r",
            window_start.isoformat(),
            window_end.isoformat(),
            rule,
        )

        occurrences: List[date] = []
        for occurrence in self._scan(rule, window_start, window_end):
            occurrences.append(occurrence)
            if self.max_occurrences and len(occurrences) > self.max_occurrences:
                logger.warning(
                    "Occurrence enumeration exceeded limit of %d between %s and %s",
                    self.max_occurrences,
                    window_start.isoformat(),
                    window_end.isoformat(),
                )
                raise OccurrenceLimitError(
                    f"More than {self.max_occurrences} occurrences between "
                    f"{window_start.isoformat()} and {window_end.isoformat()}",
                    self.max_occurrences,
                )

        logger.debug("Enumeration result: occurrences=%d", len(occurrences))
        return occurrences
