"""calrecur - calendar recurrence rule evaluation.

Decides whether a calendar date is an occurrence of a recurrence rule and
enumerates the occurrences inside a date window.
"""

from .recurrence import (
    Frequency,
    InvalidArgumentError,
    OccurrenceLimitError,
    RecurrenceEngine,
    RecurrenceError,
    RecurrenceRangeError,
    RecurrenceRule,
    RuleDefinition,
    UnexpectedValueError,
    Weekday,
)

__version__ = "1.0.0"
__description__ = "Calendar recurrence rule matching and occurrence enumeration"

__all__ = [
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
    "__description__",
    "__version__",
]
