"""Recurrence-specific exceptions for error handling."""

from typing import Optional


class RecurrenceError(Exception):
    """Base exception for recurrence rule errors."""

    def __init__(self, message: str, value: Optional[object] = None):
        super().__init__(message)
        self.message = message
        self.value = value


class RecurrenceRangeError(RecurrenceError, ValueError):
    """Exception raised when a positional or ordinal value is outside its domain."""


class InvalidArgumentError(RecurrenceError, ValueError):
    """Exception raised for an invalid enum value or an unusable argument combination."""


class UnexpectedValueError(RecurrenceError, ValueError):
    """Exception raised when rule state reaches evaluation in an impossible shape."""


class OccurrenceLimitError(RecurrenceError):
    """Exception raised when an enumeration would exceed the configured occurrence cap."""

    def __init__(self, message: str, limit: int):
        super().__init__(message, limit)
        self.limit = limit
