"""Shared test configuration with lightweight fixtures for recurrence tests."""

import logging
import os
from collections.abc import Iterator
from datetime import date
from unittest.mock import patch

import pytest

from calrecur.config.settings import RecurrenceSettings, reset_settings
from calrecur.recurrence import Frequency, RecurrenceEngine, RecurrenceRule

# ============================================================================
# Environment isolation
# ============================================================================


@pytest.fixture(autouse=True)
def clean_test_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate each test from CALRECUR_* variables, YAML files and global settings."""
    for key in list(os.environ):
        if key.upper().startswith("CALRECUR_"):
            monkeypatch.delenv(key, raising=False)

    reset_settings()
    with patch.object(RecurrenceSettings, "_find_config_file", return_value=None):
        yield
    reset_settings()


@pytest.fixture(autouse=True)
def restore_calrecur_logger() -> Iterator[None]:
    """Drop handlers that setup_logging attached during a test."""
    logger = logging.getLogger("calrecur")
    original_handlers = list(logger.handlers)
    original_level = logger.level

    yield

    for handler in list(logger.handlers):
        if handler not in original_handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(original_level)


# ============================================================================
# Settings and engine fixtures
# ============================================================================


@pytest.fixture
def test_settings() -> RecurrenceSettings:
    """Create settings with defaults suited to tests."""
    return RecurrenceSettings(max_occurrences=1000, default_week_start_day=1)


@pytest.fixture
def engine(test_settings: RecurrenceSettings) -> RecurrenceEngine:
    """Create an engine bound to the test settings."""
    return RecurrenceEngine(test_settings)


# ============================================================================
# Rule fixtures
# ============================================================================


@pytest.fixture
def rule(engine: RecurrenceEngine) -> RecurrenceRule:
    """Create an empty rule bound to the test engine."""
    return RecurrenceRule(engine)


@pytest.fixture
def second_monday_rule(engine: RecurrenceEngine) -> RecurrenceRule:
    """Create a monthly rule for the second Monday of each month."""
    rule = RecurrenceRule(engine)
    rule.set_frequency(Frequency.MONTHLY)
    rule.add_weekday("monday")
    rule.add_day_frequency(2)
    return rule


@pytest.fixture
def leap_february() -> tuple[date, date]:
    """Half-open window covering February 2024."""
    return date(2024, 2, 1), date(2024, 3, 1)
