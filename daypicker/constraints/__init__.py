"""Per-day constraint evaluation."""

from .evaluator import ConstraintEvaluator, EvaluationPass
from .models import DEFAULT_PRECEDENCE, DayModifiers, DayPredicates, DayStatus

__all__ = [
    "DEFAULT_PRECEDENCE",
    "ConstraintEvaluator",
    "DayModifiers",
    "DayPredicates",
    "DayStatus",
    "EvaluationPass",
]
