"""Unit tests for day status evaluation."""

from datetime import date
from unittest.mock import Mock

import pytest

from daypicker.constraints.evaluator import ConstraintEvaluator
from daypicker.constraints.models import (
    DEFAULT_PRECEDENCE,
    DayModifiers,
    DayPredicates,
    DayStatus,
    validate_precedence,
)
from daypicker.utils.exceptions import PredicateEvaluationError


class TestDayStatus:
    """Test the status model."""

    @pytest.mark.parametrize(
        "status,selectable",
        [
            (DayStatus.SELECTABLE, True),
            (DayStatus.HIGHLIGHTED, True),
            (DayStatus.BLOCKED, False),
            (DayStatus.OUTSIDE_RANGE, False),
        ],
    )
    def test_is_selectable(self, status, selectable):
        assert status.is_selectable is selectable

    def test_resolve_when_no_flags_then_selectable(self):
        assert DayModifiers().resolve() is DayStatus.SELECTABLE

    def test_resolve_when_outside_range_and_highlighted_then_outside_range(self):
        modifiers = DayModifiers(outside_range=True, highlighted=True)
        assert modifiers.resolve() is DayStatus.OUTSIDE_RANGE

    def test_resolve_when_blocked_and_highlighted_then_blocked(self):
        assert DayModifiers(blocked=True, highlighted=True).resolve() is DayStatus.BLOCKED

    def test_resolve_with_custom_precedence(self):
        precedence = (DayStatus.HIGHLIGHTED, DayStatus.OUTSIDE_RANGE, DayStatus.BLOCKED)
        modifiers = DayModifiers(outside_range=True, highlighted=True)
        assert modifiers.resolve(precedence) is DayStatus.HIGHLIGHTED

    def test_validate_precedence_when_incomplete_then_value_error(self):
        with pytest.raises(ValueError):
            validate_precedence((DayStatus.BLOCKED, DayStatus.HIGHLIGHTED))

    def test_validate_precedence_when_selectable_listed_then_value_error(self):
        with pytest.raises(ValueError):
            validate_precedence((DayStatus.SELECTABLE,) + DEFAULT_PRECEDENCE[1:])


class TestDefaultOutsideRange:
    """Test the default "before today" policy."""

    def test_day_before_today_is_outside_range(self, evaluator):
        assert evaluator.evaluate(date(2024, 3, 14)) is DayStatus.OUTSIDE_RANGE

    def test_today_is_selectable(self, evaluator):
        assert evaluator.evaluate(date(2024, 3, 15)) is DayStatus.SELECTABLE

    def test_day_after_today_is_selectable(self, evaluator):
        assert evaluator.evaluate(date(2024, 3, 16)) is DayStatus.SELECTABLE

    def test_custom_outside_range_replaces_default(self, fixed_today):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_outside_range=lambda day: day.month != 3), today=fixed_today
        )
        assert evaluator.evaluate(date(2024, 3, 1)) is DayStatus.SELECTABLE
        assert evaluator.evaluate(date(2024, 4, 1)) is DayStatus.OUTSIDE_RANGE


class TestPredicates:
    """Test blocked and highlighted predicates."""

    def test_blocked_fridays_in_march_2024(self, fixed_today, blocked_fridays):
        evaluator = ConstraintEvaluator(blocked_fridays, today=fixed_today)
        statuses = {
            day: evaluator.evaluate(date(2024, 3, day))
            for day in (15, 22, 29)
        }
        assert all(status is DayStatus.BLOCKED for status in statuses.values())
        assert evaluator.evaluate(date(2024, 3, 21)) is DayStatus.SELECTABLE

    def test_past_friday_is_outside_range_not_blocked(self, fixed_today, blocked_fridays):
        evaluator = ConstraintEvaluator(blocked_fridays, today=fixed_today)
        assert evaluator.evaluate(date(2024, 3, 8)) is DayStatus.OUTSIDE_RANGE

    def test_highlighted_past_day_is_outside_range(self, fixed_today):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_highlighted=lambda day: True), today=fixed_today
        )
        assert evaluator.evaluate(date(2024, 3, 1)) is DayStatus.OUTSIDE_RANGE
        assert evaluator.evaluate(date(2024, 3, 20)) is DayStatus.HIGHLIGHTED

    def test_modifiers_report_every_flag(self, fixed_today):
        evaluator = ConstraintEvaluator(
            DayPredicates(
                is_day_blocked=lambda day: True,
                is_day_highlighted=lambda day: True,
            ),
            today=fixed_today,
        )
        modifiers = evaluator.modifiers(date(2024, 3, 20))
        assert modifiers == DayModifiers(outside_range=False, blocked=True, highlighted=True)


class TestEvaluationPass:
    """Test per-pass memoization."""

    def test_predicate_runs_once_per_day_within_pass(self, fixed_today):
        blocked = Mock(return_value=False)
        evaluator = ConstraintEvaluator(DayPredicates(is_day_blocked=blocked), today=fixed_today)
        evaluation_pass = evaluator.new_pass()

        evaluation_pass.evaluate(date(2024, 3, 20))
        evaluation_pass.evaluate(date(2024, 3, 20))
        evaluation_pass.modifiers(date(2024, 3, 20))

        blocked.assert_called_once_with(date(2024, 3, 20))

    def test_new_pass_evaluates_again(self, fixed_today):
        blocked = Mock(return_value=False)
        evaluator = ConstraintEvaluator(DayPredicates(is_day_blocked=blocked), today=fixed_today)

        evaluator.evaluate(date(2024, 3, 20))
        evaluator.evaluate(date(2024, 3, 20))

        assert blocked.call_count == 2

    def test_pass_captures_today(self):
        days = iter([date(2024, 3, 15), date(2024, 3, 16)])
        evaluator = ConstraintEvaluator(today=lambda: next(days))
        evaluation_pass = evaluator.new_pass()

        assert evaluation_pass.today == date(2024, 3, 15)
        assert evaluation_pass.evaluate(date(2024, 3, 15)) is DayStatus.SELECTABLE


class TestPredicateFailures:
    """Test recovery from predicates that raise."""

    def test_failing_predicate_blocks_day(self, fixed_today):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_highlighted=Mock(side_effect=RuntimeError("boom"))),
            today=fixed_today,
        )
        modifiers = evaluator.modifiers(date(2024, 3, 20))

        assert modifiers.failed is True
        assert modifiers.resolve() is DayStatus.BLOCKED

    def test_failing_predicate_reported_to_callback(self, fixed_today):
        on_error = Mock()
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_blocked=Mock(side_effect=KeyError("x"))),
            today=fixed_today,
            on_error=on_error,
        )
        evaluator.evaluate(date(2024, 3, 20))

        on_error.assert_called_once()
        error = on_error.call_args[0][0]
        assert isinstance(error, PredicateEvaluationError)
        assert error.predicate_name == "is_day_blocked"
        assert error.day == date(2024, 3, 20)

    def test_failing_predicate_logged_as_warning(self, fixed_today, caplog):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_blocked=Mock(side_effect=ValueError("bad"))),
            today=fixed_today,
        )
        with caplog.at_level("WARNING", logger="daypicker.constraints.evaluator"):
            evaluator.evaluate(date(2024, 3, 20))

        assert "Day treated as blocked" in caplog.text

    def test_failing_error_callback_does_not_propagate(self, fixed_today):
        evaluator = ConstraintEvaluator(
            DayPredicates(is_day_blocked=Mock(side_effect=ValueError("bad"))),
            today=fixed_today,
            on_error=Mock(side_effect=RuntimeError("callback broke")),
        )
        assert evaluator.evaluate(date(2024, 3, 20)) is DayStatus.BLOCKED
