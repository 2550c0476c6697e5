"""Day status model and predicate containers."""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Optional, Sequence

DayPredicate = Callable[[date], bool]


class DayStatus(Enum):
    """Composite status of one calendar day."""

    SELECTABLE = "selectable"
    BLOCKED = "blocked"
    HIGHLIGHTED = "highlighted"
    OUTSIDE_RANGE = "outside_range"

    @property
    def is_selectable(self) -> bool:
        """Highlighting decorates a day; it does not restrict selection."""
        return self in (DayStatus.SELECTABLE, DayStatus.HIGHLIGHTED)


# Strongest first. Anything not listed resolves to SELECTABLE.
DEFAULT_PRECEDENCE: tuple[DayStatus, ...] = (
    DayStatus.OUTSIDE_RANGE,
    DayStatus.BLOCKED,
    DayStatus.HIGHLIGHTED,
)


def validate_precedence(precedence: Sequence[DayStatus]) -> tuple[DayStatus, ...]:
    """Check that ``precedence`` orders exactly the three non-default statuses.

    Raises:
        ValueError: If a status is missing, repeated, or SELECTABLE is listed
    """
    ordered = tuple(precedence)
    if sorted(s.value for s in ordered) != sorted(s.value for s in DEFAULT_PRECEDENCE):
        raise ValueError(
            "precedence must order OUTSIDE_RANGE, BLOCKED and HIGHLIGHTED exactly once, "
            f"got {[s.name for s in ordered]}"
        )
    return ordered


@dataclass(frozen=True)
class DayPredicates:
    """Caller-supplied day predicates.

    Each predicate takes a ``date`` and returns a bool. ``is_outside_range``
    left as ``None`` means "every day strictly before today".
    """

    is_outside_range: Optional[DayPredicate] = None
    is_day_blocked: Optional[DayPredicate] = None
    is_day_highlighted: Optional[DayPredicate] = None


@dataclass(frozen=True)
class DayModifiers:
    """Raw predicate outcomes for one day within one render pass."""

    outside_range: bool = False
    blocked: bool = False
    highlighted: bool = False
    failed: bool = False

    def flag_for(self, status: DayStatus) -> bool:
        return {
            DayStatus.OUTSIDE_RANGE: self.outside_range,
            DayStatus.BLOCKED: self.blocked,
            DayStatus.HIGHLIGHTED: self.highlighted,
        }.get(status, False)

    def resolve(self, precedence: Sequence[DayStatus] = DEFAULT_PRECEDENCE) -> DayStatus:
        """Collapse the flags to one status using ``precedence``."""
        for status in precedence:
            if self.flag_for(status):
                return status
        return DayStatus.SELECTABLE
