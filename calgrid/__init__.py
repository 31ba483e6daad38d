"""
calGridPy: the date grid behind month and week calendar views.

- Computes the dates a month or week grid shows, aligned to whole weeks
- Navigates by month or week and tracks a selected date
- Notifies an observer whenever the grid or the selection changes
- Can be used as a CLI (via `python -m calgrid` or `calgrid` if installed as a package)
"""

__version__ = "0.1.0"

from .context import CalendarContext
from .errors import CalendarError, InvalidDateError, InvalidModeError, ConfigurationError, CalendarInvariantError
from .engine import CalendarMode, CalendarObserver, CalendarType, GridCalendar, build_grid

__all__ = [
    'CalendarContext', 'CalendarMode', 'CalendarObserver', 'CalendarType', 'GridCalendar', 'build_grid',
    'CalendarError', 'InvalidDateError', 'InvalidModeError', 'ConfigurationError', 'CalendarInvariantError',
]
