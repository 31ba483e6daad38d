"""Date grid engine: grid building plus navigation and selection state."""

from .grid_builder import CalendarMode, build_grid, grid_rows
from .controller import CalendarObserver, CalendarType, GridCalendar

__all__ = ['CalendarMode', 'build_grid', 'grid_rows', 'CalendarObserver', 'CalendarType', 'GridCalendar']
