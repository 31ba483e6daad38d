"""Builds the ordered list of dates a month or week grid displays."""
from datetime import datetime
from enum import Enum
from typing import List

from ..context import CalendarContext
from ..errors import InvalidModeError
from ..utils.date_utils import (
    add_days, first_day_of_month, weekday_ordinal, weekday_ordinal_of_first_day,
    weeks_in_month, days_in_week,
)


class CalendarMode(Enum):
    """Display span of the grid."""
    MONTH = "month"
    WEEK = "week"

    @classmethod
    def coerce(cls, value) -> "CalendarMode":
        """Accept a CalendarMode or its string value ("month", "week").

        Raises:
            InvalidModeError: If the value names no mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidModeError(f"Unknown calendar mode {value!r}, expected one of: {', '.join(m.value for m in cls)}")


def build_grid(ctx: CalendarContext, reference_date: datetime, mode: CalendarMode) -> List[datetime]:
    """Compute the dates shown for a reference date.

    Month mode starts at the first day of the week containing the 1st of the
    month and covers whole weeks until the week containing the last day, so
    the length is always a multiple of 7. Week mode gives the 7 days of the
    week containing the reference date.

    Args:
        ctx: Calendar context (week start and timezone)
        reference_date: Date the grid is anchored to
        mode: Month or week

    Returns:
        Dates in ascending order, one day apart
    """
    mode = CalendarMode.coerce(mode)
    per_week = days_in_week(ctx, reference_date)

    if mode is CalendarMode.MONTH:
        anchor = first_day_of_month(ctx, reference_date)
        offset = weekday_ordinal_of_first_day(ctx, reference_date) - 1
        span = weeks_in_month(ctx, reference_date) * per_week
    else:
        anchor = reference_date
        offset = weekday_ordinal(ctx, reference_date) - 1
        span = per_week

    return [add_days(ctx, anchor, i - offset) for i in range(span)]


def grid_rows(dates: List[datetime], per_week: int = 7) -> List[List[datetime]]:
    """Split a grid into its weeks."""
    return [dates[i:i + per_week] for i in range(0, len(dates), per_week)]
