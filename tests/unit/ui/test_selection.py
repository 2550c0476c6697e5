"""Unit tests for selection and focus handling."""

from datetime import date
from unittest.mock import Mock

import pytest

from daypicker.constraints.evaluator import ConstraintEvaluator
from daypicker.constraints.models import DayPredicates, DayStatus
from daypicker.ui.navigation import VisibleMonths
from daypicker.ui.selection import SelectionController, SelectionState
from daypicker.utils.exceptions import DayNotSelectable, InvalidDate, NotFocused

MARCH = VisibleMonths.starting_at(date(2024, 3, 1))


@pytest.fixture
def on_date_change():
    return Mock()


@pytest.fixture
def on_focus_change():
    return Mock()


@pytest.fixture
def make_selection(fixed_today, blocked_fridays, on_date_change, on_focus_change):
    """Factory for a selection controller over March 2024 with Fridays blocked."""

    def _make(**kwargs):
        evaluator = ConstraintEvaluator(blocked_fridays, today=fixed_today)
        values = {
            "on_date_change": on_date_change,
            "on_focus_change": on_focus_change,
        }
        values.update(kwargs)
        return SelectionController(evaluator, lambda: MARCH, **values)

    return _make


class TestRequestSelect:
    """Test selection requests."""

    def test_select_when_focused_and_selectable_then_notifies(
        self, make_selection, on_date_change
    ):
        selection = make_selection(focused=True)

        result = selection.request_select(date(2024, 3, 20))

        assert result.success is True
        assert selection.selected_date == date(2024, 3, 20)
        on_date_change.assert_called_once_with(date(2024, 3, 20), MARCH)

    def test_select_when_not_focused_then_rejected_without_change(
        self, make_selection, on_date_change
    ):
        selection = make_selection(selected_date=date(2024, 3, 18))

        result = selection.request_select(date(2024, 3, 20))

        assert result.success is False
        assert isinstance(result.error, NotFocused)
        assert selection.state == SelectionState(date(2024, 3, 18), False, None)
        on_date_change.assert_not_called()

    def test_select_blocked_friday_rejected(self, make_selection, on_date_change):
        selection = make_selection(focused=True)

        result = selection.request_select(date(2024, 3, 22))

        assert isinstance(result.error, DayNotSelectable)
        assert result.error.status is DayStatus.BLOCKED
        assert selection.selected_date is None
        on_date_change.assert_not_called()

    def test_select_past_day_rejected_as_outside_range(self, make_selection):
        result = make_selection(focused=True).request_select(date(2024, 3, 14))
        assert result.error.status is DayStatus.OUTSIDE_RANGE
        with pytest.raises(DayNotSelectable):
            result.raise_for_error()

    def test_select_highlighted_day_allowed(self, fixed_today, on_date_change):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_highlighted=lambda day: True), today=fixed_today
        )
        selection = SelectionController(
            evaluator, lambda: MARCH, focused=True, on_date_change=on_date_change
        )

        assert selection.request_select(date(2024, 3, 20)).success is True

    def test_reselect_same_day_notifies_again(self, make_selection, on_date_change):
        selection = make_selection(focused=True)

        selection.request_select(date(2024, 3, 20))
        selection.request_select(date(2024, 3, 20))

        assert on_date_change.call_count == 2

    def test_select_accepts_iso_string(self, make_selection):
        selection = make_selection(focused=True)
        assert selection.request_select("2024-03-21").date == date(2024, 3, 21)
        assert selection.selected_date == date(2024, 3, 21)

    def test_select_invalid_value_raises(self, make_selection):
        with pytest.raises(InvalidDate):
            make_selection(focused=True).request_select("tomorrow-ish")

    def test_failing_callback_keeps_selection(self, make_selection):
        selection = make_selection(focused=True, on_date_change=Mock(side_effect=RuntimeError))

        result = selection.request_select(date(2024, 3, 20))

        assert result.success is True
        assert selection.selected_date == date(2024, 3, 20)


class TestClearSelection:
    """Test clearing the selected date."""

    def test_clear_when_selected_then_notifies_none(self, make_selection, on_date_change):
        selection = make_selection(selected_date=date(2024, 3, 20))

        selection.clear_selection()

        assert selection.selected_date is None
        on_date_change.assert_called_once_with(None, MARCH)

    def test_clear_when_nothing_selected_then_silent(self, make_selection, on_date_change):
        make_selection().clear_selection()
        on_date_change.assert_not_called()


class TestFocus:
    """Test focus changes and hover intents."""

    def test_set_focused_notifies_only_on_change(self, make_selection, on_focus_change):
        selection = make_selection()

        selection.set_focused(True)
        selection.set_focused(True)
        selection.set_focused(False)

        assert [c.args for c in on_focus_change.call_args_list] == [(True,), (False,)]

    def test_hover_only_on_interactive_days(self, make_selection):
        selection = make_selection(focused=True)

        assert selection.hover(date(2024, 3, 20)) is True
        assert selection.hovered_date == date(2024, 3, 20)
        assert selection.hover(date(2024, 3, 22)) is False
        assert selection.hovered_date == date(2024, 3, 20)

    def test_hover_ignored_when_unfocused(self, make_selection):
        selection = make_selection()
        assert selection.hover(date(2024, 3, 20)) is False
        assert selection.is_day_interactive(date(2024, 3, 20)) is False

    def test_losing_focus_clears_hover(self, make_selection):
        selection = make_selection(focused=True)
        selection.hover(date(2024, 3, 20))

        selection.set_focused(False)

        assert selection.hovered_date is None

    def test_unhover(self, make_selection):
        selection = make_selection(focused=True)
        selection.hover(date(2024, 3, 20))
        selection.unhover()
        assert selection.hovered_date is None


class TestResetAndMute:
    """Test silent state replacement and muting."""

    def test_reset_replaces_state_silently(self, make_selection, on_date_change, on_focus_change):
        selection = make_selection(focused=True, selected_date=date(2024, 3, 20))

        selection.reset(date(2024, 3, 25), focused=False)

        assert selection.state == SelectionState(date(2024, 3, 25), False, None)
        on_date_change.assert_not_called()
        on_focus_change.assert_not_called()

    def test_mute_refuses_selection_and_silences(self, make_selection, on_date_change):
        selection = make_selection(focused=True, selected_date=date(2024, 3, 20))

        selection.mute()
        result = selection.request_select(date(2024, 3, 21))
        selection.clear_selection()

        assert isinstance(result.error, NotFocused)
        assert selection.selected_date is None
        on_date_change.assert_not_called()
