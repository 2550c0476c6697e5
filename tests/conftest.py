"""Shared test configuration with lightweight fixtures."""

import logging
import os
from datetime import date
from typing import Any, Callable

import pytest

from daypicker.config.settings import DayPickerSettings
from daypicker.constraints.evaluator import ConstraintEvaluator
from daypicker.constraints.models import DayPredicates

TODAY = date(2024, 3, 15)


class FakeClock:
    """Manually advanced monotonic clock for the clock transition scheduler."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_settings_sources(monkeypatch: pytest.MonkeyPatch, tmp_path: Any) -> None:
    """Keep environment variables and the user's config file out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("DAYPICKER_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "daypicker.config.settings.DEFAULT_CONFIG_FILE", tmp_path / "no-config.yaml"
    )
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def reset_daypicker_logger() -> Any:
    """Remove handlers added by setup_logging during a test."""
    yield
    logger = logging.getLogger("daypicker")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    """Clock returning 2024-03-15."""
    return lambda: TODAY


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_settings() -> Callable[..., DayPickerSettings]:
    """Factory for settings with instant transitions unless overridden."""

    def _make(**overrides: Any) -> DayPickerSettings:
        values: dict[str, Any] = {"transition_duration": 0}
        values.update(overrides)
        return DayPickerSettings(**values)

    return _make


@pytest.fixture
def blocked_fridays() -> DayPredicates:
    """Predicates blocking every Friday."""
    return DayPredicates(is_day_blocked=lambda day: day.weekday() == 4)


@pytest.fixture
def evaluator(fixed_today: Callable[[], date]) -> ConstraintEvaluator:
    """Evaluator with default predicates and today fixed to 2024-03-15."""
    return ConstraintEvaluator(today=fixed_today)
