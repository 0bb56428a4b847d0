"""CLI module for calrecur.

Builds a recurrence rule from command-line options and an optional YAML rule
file, then answers a contains or occurrences query.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from ..config.settings import get_settings
from ..recurrence import RecurrenceEngine, RecurrenceError, RecurrenceRule, RuleDefinition
from ..utils.logging import apply_command_line_overrides, setup_logging
from .parser import create_parser, parse_date

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_MATCH = 1
EXIT_USAGE = 2


def load_rule_definition(path: str) -> RuleDefinition:
    """Load a rule definition from a YAML file.

    Args:
        path: Path to a YAML mapping of rule fields

    Returns:
        Validated RuleDefinition

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the mapping does not describe a rule
    """
    with Path(path).open(encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return RuleDefinition.model_validate(data)


def build_rule(
    args: argparse.Namespace, engine: Optional[RecurrenceEngine] = None
) -> RecurrenceRule:
    """Build a rule from parsed arguments, starting from the --rule file if given."""
    definition = load_rule_definition(args.rule) if args.rule else RuleDefinition()
    rule = RecurrenceRule.from_definition(definition, engine)

    if args.frequency is not None:
        rule.set_frequency(args.frequency)
    if args.interval is not None:
        rule.set_interval(args.interval)
    if args.until is not None:
        rule.set_until(args.until)
    if args.anchor is not None:
        rule.set_anchor(args.anchor)
    if args.week_start_day is not None:
        rule.set_week_start_day(args.week_start_day)

    for day in args.days:
        rule.add_day(day)
    for month in args.months:
        rule.add_month(month)
    for month_day in args.month_days:
        rule.add_month_day(month_day)
    for week in args.week_numbers:
        rule.add_week_number(week)
    for year_day in args.year_days:
        rule.add_year_day(year_day)
    for weekday in args.weekdays:
        rule.add_weekday(weekday)
    for ordinal in args.day_frequency:
        rule.add_day_frequency(ordinal)

    return rule


def run_contains(rule: RecurrenceRule, args: argparse.Namespace) -> int:
    if rule.contains(args.date):
        print(f"{args.date.isoformat()} is an occurrence")
        return EXIT_OK
    print(f"{args.date.isoformat()} is not an occurrence")
    return EXIT_NO_MATCH


def run_occurrences(rule: RecurrenceRule, args: argparse.Namespace) -> int:
    for occurrence in rule.get_occurrences(args.start, args.end):
        print(occurrence.isoformat())
    return EXIT_OK


def main_entry(argv: Optional[List[str]] = None) -> int:
    """Main entry point with argument parsing.

    Args:
        argv: Arguments to parse; sys.argv[1:] when omitted

    Returns:
        Exit code (0 for success, 1 when a checked date does not match,
        2 for invalid rules or arguments)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    settings = apply_command_line_overrides(get_settings(), args)
    setup_logging(settings)

    try:
        rule = build_rule(args, RecurrenceEngine(settings))
        logger.verbose("Built rule from command line: %r", rule)  # type: ignore[attr-defined]

        if args.command == "contains":
            return run_contains(rule, args)
        return run_occurrences(rule, args)

    except (RecurrenceError, ValidationError, OSError, yaml.YAMLError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE


__all__ = [
    "build_rule",
    "create_parser",
    "load_rule_definition",
    "main_entry",
    "parse_date",
]
