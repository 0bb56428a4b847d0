"""Command-line argument parsing for calrecur.

This module handles command-line argument parsing, including the shared
rule options used by every subcommand.
"""

import argparse
from datetime import date, datetime

FREQUENCY_CHOICES = ["daily", "weekly", "monthly", "yearly"]


def parse_date(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format for command-line arguments.

    Args:
        date_str: Date string to parse in YYYY-MM-DD format

    Returns:
        Parsed calendar date

    Raises:
        argparse.ArgumentTypeError: If date format is invalid or date is not parseable

    Example:
        >>> parse_date("2024-01-15")
        datetime.date(2024, 1, 15)
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as err:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: {date_str}. Use YYYY-MM-DD"
        ) from err


def _add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options that describe a recurrence rule."""
    rule_group = parser.add_argument_group("Rule", "Recurrence rule definition")
    rule_group.add_argument(
        "--rule",
        metavar="FILE",
        help="YAML file holding a rule definition; inline options are added on top",
    )
    rule_group.add_argument(
        "--frequency",
        type=str.lower,
        choices=FREQUENCY_CHOICES,
        help="Base period of repetition",
    )
    rule_group.add_argument("--interval", type=int, help="Repeat every N periods")
    rule_group.add_argument("--until", type=parse_date, help="Inclusive end date (YYYY-MM-DD)")
    rule_group.add_argument(
        "--anchor", type=parse_date, help="First period for interval counting (YYYY-MM-DD)"
    )
    rule_group.add_argument(
        "--week-start-day", metavar="WEEKDAY", help="First day of the week (name or 0-6)"
    )

    constraint_group = parser.add_argument_group(
        "Constraints", "Constraint values (each option may be repeated)"
    )
    constraint_group.add_argument(
        "--day", dest="days", type=int, action="append", default=[], help="Day of the month"
    )
    constraint_group.add_argument(
        "--month", dest="months", type=int, action="append", default=[], help="Month (1-12)"
    )
    constraint_group.add_argument(
        "--month-day",
        dest="month_days",
        type=int,
        action="append",
        default=[],
        help="Positional day of the month (1..31, -31..-1)",
    )
    constraint_group.add_argument(
        "--week-number",
        dest="week_numbers",
        type=int,
        action="append",
        default=[],
        help="ISO week number (1..53, -53..-1)",
    )
    constraint_group.add_argument(
        "--year-day",
        dest="year_days",
        type=int,
        action="append",
        default=[],
        help="Positional day of the year (1..366, -366..-1)",
    )
    constraint_group.add_argument(
        "--weekday",
        dest="weekdays",
        action="append",
        default=[],
        help="Weekday for the Nth-weekday constraint (name, code or 0-6)",
    )
    constraint_group.add_argument(
        "--day-frequency",
        dest="day_frequency",
        type=int,
        action="append",
        default=[],
        help="Which occurrence of the weekday in the period (0 = every, 1-6)",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the calrecur argument parser.

    Returns:
        Configured ArgumentParser with the contains and occurrences subcommands
    """
    parser = argparse.ArgumentParser(
        prog="calrecur",
        description="calrecur - evaluate calendar recurrence rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s occurrences --start 2024-01-01 --end 2025-01-01 --month-day -1
  %(prog)s contains --date 2024-01-08 --frequency monthly --weekday MO --day-frequency 2
  %(prog)s occurrences --rule rule.yaml --start 2024-01-01
        """,
    )

    logging_group = parser.add_argument_group("Logging", "Logging verbosity")
    verbosity = logging_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging output"
    )
    verbosity.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    logging_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console and file log level",
    )
    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console logs"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    contains_parser = subparsers.add_parser(
        "contains", help="Check whether a date is an occurrence of the rule"
    )
    contains_parser.add_argument(
        "--date", dest="date", type=parse_date, required=True, help="Date to check (YYYY-MM-DD)"
    )
    _add_rule_arguments(contains_parser)

    occurrences_parser = subparsers.add_parser(
        "occurrences", help="List occurrences between two dates"
    )
    occurrences_parser.add_argument(
        "--start", type=parse_date, required=True, help="First date to test (inclusive)"
    )
    occurrences_parser.add_argument(
        "--end",
        type=parse_date,
        help="Date to stop at (exclusive); defaults to the rule's until date",
    )
    _add_rule_arguments(occurrences_parser)

    return parser


__all__ = [
    "create_parser",
    "parse_date",
]
