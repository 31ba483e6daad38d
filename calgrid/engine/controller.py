"""GridCalendar: holds the displayed month or week and the selected date."""
import logging
import weakref
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Protocol

from ..context import CalendarContext
from ..errors import CalendarInvariantError
from ..utils.date_utils import (
    as_local, add_days, add_months, days_in_month, days_in_week,
    month_of, year_of, is_same_day, DAYS_PER_WEEK,
)
from .grid_builder import CalendarMode, build_grid

logger = logging.getLogger(__name__)


class CalendarObserver(Protocol):
    """Receives grid and selection changes from a GridCalendar."""

    def on_display_dates_changed(self, dates: List[datetime], calendar: "CalendarType") -> None:
        ...

    def on_selected_date_changed(self, date: datetime, calendar: "CalendarType") -> None:
        ...


class CalendarType(ABC):
    """What a calendar widget needs from its date engine."""

    @property
    @abstractmethod
    def dates(self) -> List[datetime]:
        """Dates currently displayed."""

    @property
    @abstractmethod
    def current_date(self) -> datetime:
        """Date the display is anchored to."""

    @property
    @abstractmethod
    def selected_date(self) -> Optional[datetime]:
        """Date chosen by the user, if any."""

    @abstractmethod
    def get_number_of_days_in_month(self, date) -> int:
        ...

    @abstractmethod
    def get_number_of_days_in_week(self, date=None) -> int:
        ...

    @abstractmethod
    def get_month(self, date) -> int:
        ...

    @abstractmethod
    def get_year(self, date) -> int:
        ...

    @abstractmethod
    def move_to_next_month(self) -> None:
        ...

    @abstractmethod
    def move_to_previous_month(self) -> None:
        ...

    @abstractmethod
    def get_number_of_items_for_current_mode(self) -> int:
        ...

    @abstractmethod
    def is_same_day(self, source, destination) -> bool:
        ...

    @abstractmethod
    def update_selected_date(self, date) -> None:
        ...


class GridCalendar(CalendarType):
    """Date grid engine behind a month or week calendar view.

    The grid is recomputed synchronously on construction and after every
    state change, then pushed to the observer. The observer is held through
    a weak reference; once it is gone (or detached) the calendar keeps
    computing and simply stops notifying.

    Not thread-safe: callers sharing an instance must serialize access.
    """

    def __init__(self, context: Optional[CalendarContext] = None, current_date=None,
                 mode=CalendarMode.MONTH, observer: Optional[CalendarObserver] = None,
                 selected_date=None):
        """Initialize a GridCalendar.

        Args:
            context: Calendar context (optional, Sunday week start in the host zone)
            current_date: Initial reference date (optional, defaults to now)
            mode: Initial display mode (optional, defaults to month)
            observer: Receiver of change notifications (optional)
            selected_date: Initial selection (optional)

        Raises:
            InvalidDateError: If current_date or selected_date is not a date
            InvalidModeError: If mode is unknown
            TypeError: If the observer cannot be weakly referenced
        """
        self._context = context or CalendarContext()
        self._current_date = self._context.now() if current_date is None else as_local(self._context, current_date)
        self._selected_date = None if selected_date is None else as_local(self._context, selected_date)
        self._mode = CalendarMode.coerce(mode)
        self._observer_ref = None
        self._dates: List[datetime] = []
        if observer is not None:
            self._observer_ref = weakref.ref(observer)
        self.reload()

    # --- Accessors ---
    @property
    def context(self) -> CalendarContext:
        return self._context

    @property
    def dates(self) -> List[datetime]:
        return list(self._dates)

    @property
    def current_date(self) -> datetime:
        return self._current_date

    @property
    def selected_date(self) -> Optional[datetime]:
        return self._selected_date

    @property
    def mode(self) -> CalendarMode:
        return self._mode

    @mode.setter
    def mode(self, mode) -> None:
        self.set_mode(mode)

    @property
    def observer(self) -> Optional[CalendarObserver]:
        """The attached observer, or None if detached or garbage collected."""
        return self._observer_ref() if self._observer_ref is not None else None

    def detach_observer(self) -> None:
        """Stop sending notifications."""
        self._observer_ref = None

    # --- State changes ---
    def _update(self, current_date: Optional[datetime] = None, mode: Optional[CalendarMode] = None) -> List[datetime]:
        """Build the grid for a new state, commit it, then publish it.

        Nothing is committed if building the grid fails.
        """
        current_date = self._current_date if current_date is None else current_date
        mode = self._mode if mode is None else mode
        dates = build_grid(self._context, current_date, mode)
        if not dates or len(dates) % DAYS_PER_WEEK:
            raise CalendarInvariantError(f"Grid of {len(dates)} dates is not whole weeks")
        self._current_date, self._mode, self._dates = current_date, mode, dates
        logger.debug("Grid rebuilt: mode=%s reference=%s first=%s last=%s count=%d",
                     mode.value, current_date.date(), dates[0].date(), dates[-1].date(), len(dates))
        observer = self.observer
        if observer is not None:
            observer.on_display_dates_changed(self.dates, self)
        return self.dates

    def reload(self) -> List[datetime]:
        """Recompute the grid for the current state and publish it.

        Returns:
            The new grid
        """
        return self._update()

    def set_mode(self, mode) -> None:
        """Switch between month and week display.

        Raises:
            InvalidModeError: If mode is unknown
        """
        self._update(mode=CalendarMode.coerce(mode))

    def move_by_months(self, months: int) -> None:
        """Move the reference date by whole calendar months (clamping the day)."""
        target = add_months(self._context, self._current_date, months)
        logger.debug("Moving %+d month(s) to %s", months, target.date())
        self._update(current_date=target)

    def move_to_next_month(self) -> None:
        self.move_by_months(1)

    def move_to_previous_month(self) -> None:
        self.move_by_months(-1)

    def move_by_weeks(self, weeks: int) -> None:
        """Move the reference date by whole weeks."""
        target = add_days(self._context, self._current_date, weeks * DAYS_PER_WEEK)
        logger.debug("Moving %+d week(s) to %s", weeks, target.date())
        self._update(current_date=target)

    def move_to_next_week(self) -> None:
        self.move_by_weeks(1)

    def move_to_previous_week(self) -> None:
        self.move_by_weeks(-1)

    def move_to_date(self, date) -> None:
        """Anchor the display to another date.

        Raises:
            InvalidDateError: If date is not a date
        """
        target = as_local(self._context, date)
        logger.debug("Moving to %s", target.date())
        self._update(current_date=target)

    def update_selected_date(self, date) -> None:
        """Select a date. The reference date and mode are left alone.

        Raises:
            InvalidDateError: If date is not a date; the selection is unchanged
        """
        self._selected_date = as_local(self._context, date)
        logger.debug("Selected %s", self._selected_date.date())
        observer = self.observer
        if observer is not None:
            observer.on_selected_date_changed(self._selected_date, self)

    def clear_selected_date(self) -> None:
        """Drop the selection without notifying."""
        self._selected_date = None

    # --- Queries ---
    def get_number_of_days_in_month(self, date) -> int:
        return days_in_month(self._context, date)

    def get_number_of_days_in_week(self, date=None) -> int:
        return days_in_week(self._context, date)

    def get_month(self, date) -> int:
        return month_of(self._context, date)

    def get_year(self, date) -> int:
        return year_of(self._context, date)

    def get_number_of_items_for_current_mode(self) -> int:
        return len(self._dates)

    def is_same_day(self, source, destination) -> bool:
        return is_same_day(self._context, source, destination)

    def is_selected(self, date) -> bool:
        return self._selected_date is not None and self.is_same_day(date, self._selected_date)

    def is_in_current_month(self, date) -> bool:
        """Check whether a grid date belongs to the reference month (not a leading/trailing day)."""
        return (self.get_month(date) == self.get_month(self._current_date)
                and self.get_year(date) == self.get_year(self._current_date))

    def is_today(self, date) -> bool:
        return self.is_same_day(date, self._context.now())

    def __repr__(self) -> str:
        return (f"GridCalendar(mode={self._mode.value!r}, current_date={self._current_date.isoformat()}, "
                f"selected_date={self._selected_date.isoformat() if self._selected_date else None})")
