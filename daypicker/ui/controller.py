"""Single-date calendar controller tying navigation, constraints and selection together."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, NamedTuple, Optional, Sequence

from ..config.settings import DayPickerSettings, Orientation
from ..constraints.evaluator import ConstraintEvaluator, ErrorCallback
from ..constraints.models import DEFAULT_PRECEDENCE, DayPredicates, DayStatus
from ..display.grid import MonthGridBuilder
from ..display.hooks import RenderHooks
from ..display.models import MonthGrid
from ..utils.dates import add_months, to_calendar_date
from ..utils.exceptions import InvalidDate
from .navigation import (
    NavigationDirection,
    NavigationResult,
    NavigationState,
    NavigationStateMachine,
    VisibleMonths,
)
from .selection import (
    DateChangeCallback,
    FocusChangeCallback,
    SelectionController,
    SelectionResult,
    SelectionState,
)
from .timer import TransitionScheduler

logger = logging.getLogger(__name__)

MonthsCallback = Callable[[VisibleMonths], None]


@dataclass(frozen=True)
class CalendarView:
    """Everything a renderer needs for one frame of the calendar."""

    months: tuple[MonthGrid, ...]
    orientation: Orientation
    vertical_border_spacing: int
    nav_prev: Any
    nav_next: Any
    can_navigate_prev: bool
    can_navigate_next: bool
    calendar_info: Any
    focused: bool
    selected_date: Optional[date]
    transition_in_progress: bool


class _Components(NamedTuple):
    settings: DayPickerSettings
    evaluator: ConstraintEvaluator
    navigation: NavigationStateMachine
    selection: SelectionController
    grid_builder: MonthGridBuilder


class DayPickerSingleDateController:
    """Controls a calendar that selects exactly one date.

    The caller keeps the selected date and focus in sync through
    ``on_date_change`` and ``on_focus_change``; a day can only be selected
    while the controller is focused and the day's status allows it.
    """

    def __init__(
        self,
        settings: Optional[DayPickerSettings] = None,
        *,
        selected_date: Optional[date] = None,
        focused: bool = False,
        initial_visible_month: Optional[Callable[[], date]] = None,
        predicates: Optional[DayPredicates] = None,
        hooks: Optional[RenderHooks] = None,
        on_date_change: Optional[DateChangeCallback] = None,
        on_focus_change: Optional[FocusChangeCallback] = None,
        on_prev_month_click: Optional[MonthsCallback] = None,
        on_next_month_click: Optional[MonthsCallback] = None,
        on_outside_click: Optional[Callable[[], None]] = None,
        on_predicate_error: Optional[ErrorCallback] = None,
        scheduler: Optional[TransitionScheduler] = None,
        today: Callable[[], date] = date.today,
        precedence: Sequence[DayStatus] = DEFAULT_PRECEDENCE,
    ):
        """Initialize the controller.

        Args:
            settings: Layout, locale and navigation settings
            selected_date: Initially selected date
            focused: Whether selection gestures are accepted initially
            initial_visible_month: Called once to choose the first visible
                month; defaults to the selected date's month, then today's
            predicates: Outside-range, blocked and highlighted predicates
            hooks: Rendering hooks
            on_date_change: Called with the new date and the visible months
            on_focus_change: Called with the new focus flag
            on_prev_month_click: Called with the visible months after a step back
            on_next_month_click: Called with the visible months after a step forward
            on_outside_click: Called when the caller reports an outside click
            on_predicate_error: Diagnostic callback for failing predicates
            scheduler: Timer source for month transitions
            today: Clock for "today" and the default outside-range policy
            precedence: Day status precedence, strongest first
        """
        self._today = today
        self._precedence = tuple(precedence)
        self._scheduler = scheduler
        self._on_date_change = on_date_change
        self._on_focus_change = on_focus_change
        self._on_prev_month_click = on_prev_month_click
        self._on_next_month_click = on_next_month_click
        self._on_outside_click = on_outside_click
        self._on_predicate_error = on_predicate_error
        self._torn_down = False

        self.settings = settings or DayPickerSettings()
        self.hooks = hooks or RenderHooks()
        self._install(
            self._build(
                self.settings,
                predicates or DayPredicates(),
                selected_date,
                focused,
                initial_visible_month,
            )
        )

        logger.info("Day picker controller initialized")

    def _build(
        self,
        settings: DayPickerSettings,
        predicates: DayPredicates,
        selected_date: Optional[date],
        focused: bool,
        initial_visible_month: Optional[Callable[[], date]],
    ) -> _Components:
        """Construct every component for ``settings`` without touching ``self``."""
        evaluator = ConstraintEvaluator(
            predicates, self._today, self._precedence, self._on_predicate_error
        )

        if initial_visible_month is not None:
            initial = to_calendar_date(initial_visible_month())
        elif selected_date is not None:
            initial = to_calendar_date(selected_date)
        else:
            initial = to_calendar_date(self._today())
        if selected_date is not None:
            selected_date = to_calendar_date(selected_date)

        navigation = NavigationStateMachine(
            initial_month=initial,
            number_of_months=settings.number_of_months,
            transition_duration=settings.transition_duration,
            min_month=settings.min_month,
            max_month=settings.max_month,
            scheduler=self._scheduler,
        )

        selection = SelectionController(
            evaluator,
            lambda: navigation.visible_months,
            selected_date=selected_date,
            focused=focused,
            on_date_change=self._on_date_change,
            on_focus_change=self._on_focus_change,
        )

        grid_builder = MonthGridBuilder(
            locale=settings.locale,
            month_format=settings.month_format,
            first_weekday=settings.first_day_of_week,
            hooks=self.hooks,
            on_month_select=self.month_select,
            on_year_select=self.year_select,
        )
        return _Components(settings, evaluator, navigation, selection, grid_builder)

    def _install(self, components: _Components) -> None:
        self.settings = components.settings
        self.evaluator = components.evaluator
        self.navigation = components.navigation
        self.selection = components.selection
        self.grid_builder = components.grid_builder
        self.navigation.add_change_callback(self._on_navigation_changed)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def selected_date(self) -> Optional[date]:
        return self.selection.selected_date

    @property
    def focused(self) -> bool:
        return self.selection.focused

    @property
    def visible_months(self) -> VisibleMonths:
        return self.navigation.visible_months

    @property
    def navigation_state(self) -> NavigationState:
        return self.navigation.state

    @property
    def selection_state(self) -> SelectionState:
        return self.selection.state

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def day_status(self, day: Any) -> DayStatus:
        """Status of ``day`` evaluated now."""
        return self.evaluator.evaluate(to_calendar_date(day))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def navigate_prev(self) -> NavigationResult:
        return self.navigation.navigate_prev()

    def navigate_next(self) -> NavigationResult:
        return self.navigation.navigate_next()

    def jump_to(self, month: Any) -> NavigationResult:
        """Show the month of ``month`` first, without a transition."""
        return self.navigation.jump_to(to_calendar_date(month))

    def month_select(self, month: date, new_month: Any) -> NavigationResult:
        """Change the captioned ``month`` to another month of the same year.

        The visible months shift so that the caption at the same position
        shows the chosen month.
        """
        return self._caption_jump(month, lambda m: (m.year, int(new_month)))

    def year_select(self, month: date, new_year: Any) -> NavigationResult:
        """Change the captioned ``month`` to the same month of another year."""
        return self._caption_jump(month, lambda m: (int(new_year), m.month))

    def _caption_jump(self, month: date, target: Callable[[date], tuple[int, int]]) -> NavigationResult:
        month = to_calendar_date(month)
        visible = self.navigation.visible_months
        position = visible.index_of(month) if month in visible else 0
        try:
            year, month_number = target(month)
            chosen = date(year, month_number, 1)
        except (TypeError, ValueError) as e:
            raise InvalidDate(f"Invalid month selection: {e}", month) from e
        return self.navigation.jump_to(add_months(chosen, -position))

    def _on_navigation_changed(
        self, direction: Optional[NavigationDirection], months: VisibleMonths
    ) -> None:
        if direction is NavigationDirection.FORWARD:
            callback = self._on_next_month_click
        elif direction is NavigationDirection.BACKWARD:
            callback = self._on_prev_month_click
        else:
            return
        if callback is not None:
            callback(months)

    # ------------------------------------------------------------------
    # Selection and focus
    # ------------------------------------------------------------------
    def request_select(self, day: Any) -> SelectionResult:
        """Select ``day``; see :meth:`SelectionController.request_select`."""
        result = self.selection.request_select(day)
        if result.success and not self.settings.keep_open_on_date_select:
            self.selection.set_focused(False)
        return result

    def clear_selection(self) -> None:
        self.selection.clear_selection()

    def set_focused(self, focused: bool) -> None:
        if self._torn_down:
            return
        self.selection.set_focused(focused)

    def day_mouse_enter(self, day: Any) -> bool:
        return self.selection.hover(day)

    def day_mouse_leave(self, day: Any) -> None:
        if self.selection.hovered_date == to_calendar_date(day):
            self.selection.unhover()

    def outside_click(self) -> None:
        """Report an interaction outside the calendar surface."""
        if self._torn_down or self._on_outside_click is None:
            return
        try:
            self._on_outside_click()
        except Exception as e:
            logger.error(f"Error in outside click callback: {e}")

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> CalendarView:
        """Build the month grids and navigation data for the current state."""
        evaluation_pass = self.evaluator.new_pass()
        grids = self.grid_builder.build(
            self.navigation.visible_months,
            evaluation_pass,
            include_outside_days=self.settings.enable_outside_days,
            selected_date=self.selection.selected_date,
            hovered_date=self.selection.hovered_date,
        )
        state = self.navigation.state
        return CalendarView(
            months=tuple(grids),
            orientation=self.settings.orientation,
            vertical_border_spacing=self.settings.vertical_border_spacing,
            nav_prev=self.hooks.nav_prev_contents(),
            nav_next=self.hooks.nav_next_contents(),
            can_navigate_prev=self.navigation.can_navigate_prev(),
            can_navigate_next=self.navigation.can_navigate_next(),
            calendar_info=self.hooks.calendar_info(),
            focused=self.selection.focused,
            selected_date=self.selection.selected_date,
            transition_in_progress=state.transition_in_progress,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def reconfigure(
        self,
        settings: Optional[DayPickerSettings] = None,
        *,
        predicates: Optional[DayPredicates] = None,
        selected_date: Optional[date] = None,
        focused: Optional[bool] = None,
        initial_visible_month: Optional[Callable[[], date]] = None,
    ) -> None:
        """Replace the configuration and reset navigation and selection.

        Omitted ``settings``, ``predicates`` and ``focused`` keep their current
        values; the selection is always reset to ``selected_date``. If the new
        configuration cannot be built the controller keeps its current state.

        Raises:
            InvalidDate: If the initial or selected date is not a date
            ValueError: If the settings describe an impossible month layout
        """
        if self._torn_down:
            logger.warning("Ignoring reconfigure on a torn down controller")
            return
        components = self._build(
            settings or self.settings,
            predicates or self.evaluator.predicates,
            selected_date,
            self.selection.focused if focused is None else focused,
            initial_visible_month,
        )
        old_navigation = self.navigation
        self._install(components)
        old_navigation.teardown()
        logger.debug("Day picker controller reconfigured")

    def teardown(self) -> None:
        """Cancel pending transitions and silence every notification."""
        if self._torn_down:
            return
        self._torn_down = True
        self.navigation.teardown()
        self.selection.mute()
        logger.info("Day picker controller torn down")

    def __enter__(self) -> "DayPickerSingleDateController":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.teardown()

    def __repr__(self) -> str:
        return (
            f"DayPickerSingleDateController(visible_months={self.navigation.visible_months}, "
            f"selected_date={self.selection.selected_date}, focused={self.selection.focused})"
        )
