"""Shared fixtures for controller tests."""

from datetime import date
from unittest.mock import Mock

import pytest

from daypicker.ui.controller import DayPickerSingleDateController


@pytest.fixture
def callbacks():
    """Mock notification callbacks keyed by constructor argument name."""
    return {
        "on_date_change": Mock(),
        "on_focus_change": Mock(),
        "on_prev_month_click": Mock(),
        "on_next_month_click": Mock(),
        "on_outside_click": Mock(),
    }


@pytest.fixture
def make_controller(make_settings, fixed_today, callbacks):
    """Factory for controllers with today fixed to 2024-03-15 and mock callbacks."""

    def _make(settings=None, **kwargs):
        values = {"today": fixed_today}
        values.update(callbacks)
        values.update(kwargs)
        return DayPickerSingleDateController(settings or make_settings(), **values)

    return _make


@pytest.fixture
def march_months():
    return (date(2024, 3, 1),)
