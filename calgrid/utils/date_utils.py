"""Date utility functions for calgrid.

Every function reads dates through a CalendarContext: field extraction
and day boundaries use its timezone, week positions use its week start.
Arithmetic happens on local wall-clock values, so stepping over a DST
change keeps midnight at midnight.
"""
from datetime import datetime, date, time, timedelta
from typing import Tuple

from dateutil.relativedelta import relativedelta

from ..context import CalendarContext
from ..errors import InvalidDateError, CalendarInvariantError

DAYS_PER_WEEK = 7


def as_local(ctx: CalendarContext, value) -> datetime:
    """Convert a caller-supplied date into an aware datetime in the context zone.

    Args:
        ctx: Calendar context
        value: datetime (aware or naive) or date

    Returns:
        Aware datetime in the context timezone

    Raises:
        InvalidDateError: If the value is not a date
    """
    if isinstance(value, datetime):
        try:
            return ctx.to_local(value)
        except (OverflowError, ValueError) as e:
            raise InvalidDateError(f"Date cannot be represented in {ctx.timezone_name}: {value} ({e})")
    if isinstance(value, date):
        return ctx.localize(datetime.combine(value, time.min))
    raise InvalidDateError(f"Expected a date or datetime, got {type(value).__name__}: {value!r}")


def parse_date(ctx: CalendarContext, date_str: str) -> datetime:
    """Parse a YYYY-MM-DD string into local midnight of that day.

    Raises:
        InvalidDateError: If the string is not a valid date
    """
    try:
        parsed = datetime.strptime(date_str.strip(), "%Y-%m-%d")
    except (AttributeError, ValueError):
        raise InvalidDateError(f"Invalid date {date_str!r}, expected YYYY-MM-DD")
    return ctx.localize(parsed)


def _wall_clock(ctx: CalendarContext, dt) -> datetime:
    return as_local(ctx, dt).replace(tzinfo=None)


def _relocalize(ctx: CalendarContext, naive: datetime) -> datetime:
    try:
        return ctx.localize(naive)
    except (OverflowError, ValueError) as e:
        raise CalendarInvariantError(f"Cannot place {naive} in {ctx.timezone_name}: {e}")


def start_of_day(ctx: CalendarContext, dt) -> datetime:
    """Get local midnight of the day containing dt."""
    return _relocalize(ctx, datetime.combine(_wall_clock(ctx, dt).date(), time.min))


def first_day_of_month(ctx: CalendarContext, dt) -> datetime:
    """Get local midnight of the first day of the month containing dt."""
    local = _wall_clock(ctx, dt)
    return _relocalize(ctx, datetime(local.year, local.month, 1))


def add_days(ctx: CalendarContext, dt, days: int) -> datetime:
    """Offset a date by a number of calendar days.

    The local time of day is kept; month and year boundaries roll over.

    Raises:
        CalendarInvariantError: If the result is outside the supported range
    """
    try:
        shifted = _wall_clock(ctx, dt) + timedelta(days=days)
    except OverflowError as e:
        raise CalendarInvariantError(f"Cannot add {days} days to {dt}: {e}")
    return _relocalize(ctx, shifted)


def add_months(ctx: CalendarContext, dt, months: int) -> datetime:
    """Offset a date by a number of calendar months.

    A day that does not exist in the target month is clamped to that
    month's last day, e.g. Jan 31 + 1 month is Feb 29 in a leap year.

    Raises:
        CalendarInvariantError: If the result is outside the supported range
    """
    try:
        shifted = _wall_clock(ctx, dt) + relativedelta(months=months)
    except (OverflowError, ValueError) as e:
        raise CalendarInvariantError(f"Cannot add {months} months to {dt}: {e}")
    return _relocalize(ctx, shifted)


def days_in_month(ctx: CalendarContext, dt) -> int:
    """Get the number of days in the month containing dt.

    Read from the day component of "day 0" of the following month,
    i.e. the last day of this one.
    """
    first = first_day_of_month(ctx, dt)
    last = add_days(ctx, add_months(ctx, first, 1), -1)
    return day_of(ctx, last)


def days_in_week(ctx: CalendarContext, dt=None) -> int:
    """Get the number of days in a week. Always 7."""
    return DAYS_PER_WEEK


def weekday_ordinal(ctx: CalendarContext, dt) -> int:
    """Get the 1-based position of dt within its week.

    1 is the context's first weekday, 7 the last.
    """
    return (_wall_clock(ctx, dt).weekday() - ctx.first_weekday) % DAYS_PER_WEEK + 1


def weekday_ordinal_of_first_day(ctx: CalendarContext, dt) -> int:
    """Get the 1-based weekday position of the first day of dt's month."""
    return weekday_ordinal(ctx, first_day_of_month(ctx, dt))


def weeks_in_month(ctx: CalendarContext, dt) -> int:
    """Count the weeks (grid rows) that contain at least one day of dt's month."""
    local = _wall_clock(ctx, dt)
    return len(ctx.calendar.monthdayscalendar(local.year, local.month))


def day_of(ctx: CalendarContext, dt) -> int:
    return _wall_clock(ctx, dt).day


def month_of(ctx: CalendarContext, dt) -> int:
    return _wall_clock(ctx, dt).month


def year_of(ctx: CalendarContext, dt) -> int:
    return _wall_clock(ctx, dt).year


def is_same_day(ctx: CalendarContext, a, b) -> bool:
    """Check whether two dates fall on the same calendar day in the context zone.

    The time of day is ignored.
    """
    return _wall_clock(ctx, a).date() == _wall_clock(ctx, b).date()


def get_week_range(ctx: CalendarContext, target_date) -> Tuple[datetime, datetime]:
    """Get the first and last day of the week containing the target date.

    Args:
        ctx: Calendar context (its week start decides where the week begins)
        target_date: Date within the week

    Returns:
        Tuple of (start_date, end_date), both local midnight
    """
    start = add_days(ctx, start_of_day(ctx, target_date), 1 - weekday_ordinal(ctx, target_date))
    end = add_days(ctx, start, DAYS_PER_WEEK - 1)
    return start, end


def get_month_range(ctx: CalendarContext, target_date) -> Tuple[datetime, datetime]:
    """Get the first and last day of the month containing the target date.

    Args:
        ctx: Calendar context
        target_date: Date within the month

    Returns:
        Tuple of (start_date, end_date), both local midnight
    """
    start = first_day_of_month(ctx, target_date)
    end = add_days(ctx, start, days_in_month(ctx, start) - 1)
    return start, end


def day_str(ctx: CalendarContext, dt) -> str:
    """Format a date as a string with day of week, e.g. "(Thu)2024-02-15"."""
    local = _wall_clock(ctx, dt)
    return f"({['Mon','Tue','Wed','Thu','Fri','Sat','Sun'][local.weekday()]}){local.date()}"
