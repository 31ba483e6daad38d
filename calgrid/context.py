"""CalendarContext: the calendar rules and timezone every date is read in."""
import calendar
from datetime import datetime, tzinfo
from typing import Union

import pytz
from dateutil import tz as dateutil_tz

from .errors import ConfigurationError

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY


def local_timezone() -> tzinfo:
    """Get the DST-aware timezone of the host, following TZ or the OS setting."""
    return dateutil_tz.tzlocal()


def resolve_timezone(tz: Union[str, tzinfo, None]) -> tzinfo:
    """Turn an IANA name (or None for the host zone) into a tzinfo.

    Args:
        tz: Timezone name such as "Europe/Berlin", a tzinfo, or None

    Returns:
        The resolved tzinfo

    Raises:
        ConfigurationError: If the name is not a known timezone
    """
    if tz is None or tz == "":
        return local_timezone()
    if isinstance(tz, tzinfo):
        return tz
    try:
        return pytz.timezone(tz)
    except pytz.UnknownTimeZoneError:
        raise ConfigurationError(f"Unknown timezone: {tz}")


class CalendarContext:
    """Week-start rule plus timezone, fixed for the lifetime of a calendar.

    Month lengths and leap years follow the proleptic Gregorian calendar
    of the ``datetime`` module.
    """

    __slots__ = ("_first_weekday", "_timezone", "_calendar")

    def __init__(self, first_weekday: int = SUNDAY, timezone: Union[str, tzinfo, None] = None):
        """Initialize a CalendarContext.

        Args:
            first_weekday: Day the week starts on (0=Monday, 6=Sunday)
            timezone: IANA timezone name or tzinfo (optional, host zone if omitted)
        """
        if isinstance(first_weekday, bool) or not isinstance(first_weekday, int) or not 0 <= first_weekday <= 6:
            raise ConfigurationError(f"Week start must be 0..6 (0=Monday, 6=Sunday), got {first_weekday!r}")
        self._first_weekday = first_weekday
        self._timezone = resolve_timezone(timezone)
        self._calendar = calendar.Calendar(firstweekday=first_weekday)

    @property
    def first_weekday(self) -> int:
        return self._first_weekday

    @property
    def timezone(self) -> tzinfo:
        return self._timezone

    @property
    def calendar(self) -> calendar.Calendar:
        return self._calendar

    @property
    def timezone_name(self) -> str:
        """Get a printable name for the timezone."""
        if isinstance(self._timezone, dateutil_tz.tzlocal):
            return "local"
        return getattr(self._timezone, "zone", None) or str(self._timezone)

    def localize(self, naive: datetime) -> datetime:
        """Attach the context timezone to a wall-clock datetime.

        pytz zones need ``localize`` to pick the right UTC offset;
        any other tzinfo is attached directly.
        """
        if hasattr(self._timezone, "localize"):
            return self._timezone.localize(naive)
        return naive.replace(tzinfo=self._timezone)

    def to_local(self, dt: datetime) -> datetime:
        """Express a datetime in the context timezone.

        Naive values are taken as local wall-clock time.
        """
        if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
            return self.localize(dt.replace(tzinfo=None))
        return dt.astimezone(self._timezone)

    def now(self) -> datetime:
        """Get the current time in the context timezone."""
        return datetime.now(self._timezone)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CalendarContext):
            return NotImplemented
        return self._first_weekday == other._first_weekday and self.timezone_name == other.timezone_name

    def __hash__(self) -> int:
        return hash((self._first_weekday, self.timezone_name))

    def __repr__(self) -> str:
        return f"CalendarContext(first_weekday={self._first_weekday}, timezone={self.timezone_name!r})"
