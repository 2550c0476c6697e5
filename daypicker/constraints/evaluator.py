"""Applies caller-supplied day predicates and resolves a single day status."""

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..utils.dates import is_inclusively_after_day, to_calendar_date
from ..utils.exceptions import PredicateEvaluationError
from .models import (
    DEFAULT_PRECEDENCE,
    DayModifiers,
    DayPredicate,
    DayPredicates,
    DayStatus,
    validate_precedence,
)

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[PredicateEvaluationError], None]


class ConstraintEvaluator:
    """Evaluates blocked / highlighted / outside-range predicates for days."""

    def __init__(
        self,
        predicates: Optional[DayPredicates] = None,
        today: Callable[[], date] = date.today,
        precedence: Sequence[DayStatus] = DEFAULT_PRECEDENCE,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            predicates: Caller predicates; missing ones never fire, except
                ``is_outside_range`` which defaults to "before today"
            today: Clock used by the default outside-range policy
            precedence: Status order, strongest first
            on_error: Diagnostic callback for predicate failures
        """
        self.predicates = predicates or DayPredicates()
        self.precedence = validate_precedence(precedence)
        self._today = today
        self._on_error = on_error

    def new_pass(self) -> "EvaluationPass":
        """Start a render pass; results are memoized only within the pass."""
        return EvaluationPass(self, to_calendar_date(self._today()))

    def evaluate(self, day: date) -> DayStatus:
        """Evaluate a single day in a fresh pass."""
        return self.new_pass().evaluate(day)

    def modifiers(self, day: date) -> DayModifiers:
        """Raw predicate outcomes for a single day in a fresh pass."""
        return self.new_pass().modifiers(day)

    def _report(self, error: PredicateEvaluationError) -> None:
        logger.warning(f"Day treated as blocked: {error}")
        if self._on_error is None:
            return
        try:
            self._on_error(error)
        except Exception as e:
            logger.error(f"Error in predicate error callback: {e}")


class EvaluationPass:
    """One render pass: each predicate runs at most once per day."""

    def __init__(self, evaluator: ConstraintEvaluator, today: date) -> None:
        self._evaluator = evaluator
        self.today = today
        self._cache: dict[date, DayModifiers] = {}

    def _default_outside_range(self, day: date) -> bool:
        return not is_inclusively_after_day(day, self.today)

    def modifiers(self, day: date) -> DayModifiers:
        day = to_calendar_date(day)
        cached = self._cache.get(day)
        if cached is not None:
            return cached

        predicates = self._evaluator.predicates
        checks: list[tuple[str, Optional[DayPredicate]]] = [
            ("is_outside_range", predicates.is_outside_range or self._default_outside_range),
            ("is_day_blocked", predicates.is_day_blocked),
            ("is_day_highlighted", predicates.is_day_highlighted),
        ]
        flags = {}
        for name, predicate in checks:
            if predicate is None:
                flags[name] = False
                continue
            try:
                flags[name] = bool(predicate(day))
            except Exception as e:
                self._evaluator._report(PredicateEvaluationError(name, day, e))
                result = DayModifiers(blocked=True, failed=True)
                self._cache[day] = result
                return result

        result = DayModifiers(
            outside_range=flags["is_outside_range"],
            blocked=flags["is_day_blocked"],
            highlighted=flags["is_day_highlighted"],
        )
        self._cache[day] = result
        return result

    def evaluate(self, day: date) -> DayStatus:
        return self.modifiers(day).resolve(self._evaluator.precedence)
