"""Exceptions raised or reported by the day picker core."""

from typing import Any, Optional


class DayPickerError(Exception):
    """Base exception for all day picker errors.

    Args:
        message: Human-readable error description
        details: Optional dictionary containing additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidDate(DayPickerError, ValueError):
    """Raised when a value cannot be used as a calendar date."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        details = {"value": repr(value)} if value is not None else None
        super().__init__(message, details)


class PredicateEvaluationError(DayPickerError):
    """A caller-supplied day predicate raised while evaluating a day.

    Never raised out of the evaluator; the day is treated as blocked and the
    error is handed to the diagnostic channel instead.
    """

    def __init__(self, predicate_name: str, day: Any, original: BaseException) -> None:
        self.predicate_name = predicate_name
        self.day = day
        self.original = original
        super().__init__(
            f"Predicate {predicate_name} failed",
            {"day": str(day), "error": f"{type(original).__name__}: {original}"},
        )


class SelectionError(DayPickerError):
    """Base class for rejected selection attempts."""


class NotFocused(SelectionError):
    """Selection was requested while the controller is not focused."""

    def __init__(self, day: Any) -> None:
        self.day = day
        super().__init__("Controller is not focused", {"day": str(day)})


class DayNotSelectable(SelectionError):
    """Selection was requested for a day whose status forbids it."""

    def __init__(self, day: Any, status: Any) -> None:
        self.day = day
        self.status = status
        super().__init__(
            "Day is not selectable",
            {"day": str(day), "status": getattr(status, "value", str(status))},
        )


class NavigationError(DayPickerError):
    """Base class for rejected navigation requests."""


class NavigationBoundExceeded(NavigationError):
    """Navigation would move the visible months outside the configured bounds."""

    def __init__(self, requested: Any, min_month: Any = None, max_month: Any = None) -> None:
        self.requested = requested
        self.min_month = min_month
        self.max_month = max_month
        super().__init__(
            "Navigation bound exceeded",
            {
                "requested": str(requested),
                "min_month": str(min_month) if min_month else None,
                "max_month": str(max_month) if max_month else None,
            },
        )


class NavigationInProgress(NavigationError):
    """Navigation was requested while a month transition is still running."""

    def __init__(self) -> None:
        super().__init__("Month transition in progress")


class ControllerTornDown(NavigationError):
    """The controller was torn down and accepts no further requests."""

    def __init__(self) -> None:
        super().__init__("Controller has been torn down")
