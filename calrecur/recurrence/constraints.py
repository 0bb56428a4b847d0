"""Per-dimension constraint checks for recurrence rules.

Every check takes a rule and a calendar date and answers for one dimension
only. A dimension whose constraint set is empty is unconstrained and passes.
"""

from datetime import date, timedelta
from typing import TYPE_CHECKING

from .exceptions import UnexpectedValueError
from .models import Frequency, Weekday
from .positional import resolve_day_of_month, resolve_day_of_year

if TYPE_CHECKING:
    from .rule import RecurrenceRule

DAYS_PER_WEEK = 7


def iso_weeks_in_year(iso_year: int) -> int:
    """Number of ISO 8601 weeks (52 or 53) in an ISO year."""
    # December 28th always falls in the last ISO week of its year
    return date(iso_year, 12, 28).isocalendar()[1]


def start_of_week(day: date, week_start_day: Weekday) -> date:
    """First day of the week containing ``day`` for the given week start."""
    offset = (Weekday.of(day) - week_start_day) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


class ConstraintEvaluator:
    """Evaluates single constraint dimensions of a recurrence rule.

    The evaluator holds no rule state. Week numbering follows ISO 8601, the
    same convention as ``date.isocalendar()``: weeks start on Monday and week 1
    is the week holding the year's first Thursday.
    """

    def __init__(self, default_week_start_day: Weekday = Weekday.MONDAY):
        """Initialize ConstraintEvaluator.

        Args:
            default_week_start_day: Week start used for interval counting when
                the rule does not set one
        """
        self.default_week_start_day = Weekday.parse(default_week_start_day)

    def on_until(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check the inclusive end date."""
        until = rule.get_until()
        return until is None or day <= until

    def on_months(self, rule: "RecurrenceRule", day: date) -> bool:
        months = rule.get_months()
        return not months or day.month in months

    def on_week_numbers(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check the ISO week number, counting negative numbers from the last week."""
        week_numbers = rule.get_week_numbers()
        if not week_numbers:
            return True

        iso_year, week, _ = day.isocalendar()
        if week in week_numbers:
            return True
        return week - iso_weeks_in_year(iso_year) - 1 in week_numbers

    def on_days(self, rule: "RecurrenceRule", day: date) -> bool:
        days = rule.get_days()
        return not days or day.day in days

    def on_year_days(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check positional days of the year, e.g. -1 for December 31st."""
        year_days = rule.get_year_days()
        if not year_days:
            return True

        # Position 0 names no day; like day 400 it matches nothing
        return any(
            resolve_day_of_year(position, day.year) == day for position in year_days if position
        )

    def on_month_days(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check positional days of the month, e.g. -1 for the last day."""
        month_days = rule.get_month_days()
        if not month_days:
            return True

        return any(
            resolve_day_of_month(position, day.month, day.year) == day for position in month_days
        )

    def on_day_frequency(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check the Nth-weekday-of-period constraint, e.g. the second Monday of the month.

        The weekday must be one of the rule's weekdays. When ordinals are
        configured (other than 0, which means every week), the count of that
        weekday from the start of the period must be one of them. The period
        is the rule's frequency; daily rules only filter by weekday.

        Raises:
            UnexpectedValueError: If ordinals are configured but the rule has
                no valid frequency to define the period
        """
        weekdays = rule.get_weekdays()
        if not weekdays:
            return True

        if Weekday.of(day) not in weekdays:
            return False

        ordinals = rule.get_day_frequency()
        if not ordinals or 0 in ordinals:
            return True

        frequency = rule.get_frequency()
        if frequency == Frequency.DAILY:
            return True
        if frequency == Frequency.WEEKLY:
            ordinal = 1
        elif frequency == Frequency.MONTHLY:
            ordinal = (day.day - 1) // DAYS_PER_WEEK + 1
        elif frequency == Frequency.YEARLY:
            ordinal = (day.timetuple().tm_yday - 1) // DAYS_PER_WEEK + 1
        else:
            raise UnexpectedValueError(
                f"The provided frequency `{frequency}` is invalid", frequency
            )

        return ordinal in ordinals

    def on_interval(self, rule: "RecurrenceRule", day: date) -> bool:
        """Check that the date falls in every Nth period counted from the anchor.

        Only enforced when the rule has an anchor, a frequency and an
        interval above 1. Dates before the anchor never match.
        """
        anchor = rule.get_anchor()
        interval = rule.get_interval()
        frequency = rule.get_frequency()
        if anchor is None or frequency is None or interval <= 1:
            return True

        if day < anchor:
            return False

        return self.periods_between(rule, anchor, day) % interval == 0

    def periods_between(self, rule: "RecurrenceRule", first: date, second: date) -> int:
        """Count whole frequency periods from the period of ``first`` to that of ``second``."""
        frequency = rule.get_frequency()
        if frequency == Frequency.DAILY:
            return (second - first).days
        if frequency == Frequency.WEEKLY:
            week_start = rule.get_week_start_day()
            if week_start is None:
                week_start = self.default_week_start_day
            delta = start_of_week(second, week_start) - start_of_week(first, week_start)
            return delta.days // DAYS_PER_WEEK
        if frequency == Frequency.MONTHLY:
            return (second.year - first.year) * 12 + second.month - first.month
        if frequency == Frequency.YEARLY:
            return second.year - first.year

        raise UnexpectedValueError(f"The provided frequency `{frequency}` is invalid", frequency)
