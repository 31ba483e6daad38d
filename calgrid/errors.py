"""Exception types raised by calgrid."""


class CalendarError(Exception):
    """Base class for errors a caller can recover from."""


class InvalidDateError(CalendarError, ValueError):
    """A value passed in by the caller is not a usable calendar date."""


class InvalidModeError(CalendarError, ValueError):
    """An unknown display mode was requested."""


class ConfigurationError(CalendarError):
    """The timezone or week start setting cannot be used."""


class CalendarInvariantError(AssertionError):
    """Date arithmetic failed on values that were already valid.

    Not a CalendarError: this signals a bug or a broken timezone object,
    and ``except CalendarError`` must not hide it.
    """
