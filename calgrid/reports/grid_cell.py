"""GridCell class for representing one displayed date of a calendar grid."""
from datetime import datetime
from typing import Any, List

from ..engine.controller import GridCalendar
from ..utils.format_utils import WEEKDAY_ABBR, format_cell, format_date, yes_no


class GridCell:
    """A date from the grid together with how the view should flag it."""

    def __init__(self, date: datetime, calendar: GridCalendar, index: int = 0):
        """Initialize a GridCell.

        Args:
            date: Grid date
            calendar: Calendar the date was taken from
            index: Position of the date in the grid
        """
        self.date = calendar.context.to_local(date)
        self.index = index
        self.in_month = calendar.is_in_current_month(date)
        self.is_selected = calendar.is_selected(date)
        self.is_today = calendar.is_today(date)

    @property
    def day(self) -> int:
        return self.date.day

    @property
    def weekday(self) -> str:
        """Get the weekday abbreviation (Mon..Sun)."""
        return WEEKDAY_ABBR[self.date.weekday()]

    @property
    def week(self) -> int:
        """Get the grid row (0-based) this cell sits in."""
        return self.index // 7

    @property
    def label(self) -> str:
        return format_cell(self.day, self.in_month, self.is_selected, self.is_today)

    def to_row(self) -> List[Any]:
        """Convert to a CSV row.

        Returns:
            [index, date, weekday, week, in month, selected, today]
        """
        return [
            self.index,
            format_date(self.date),
            self.weekday,
            self.week,
            yes_no(self.in_month),
            yes_no(self.is_selected),
            yes_no(self.is_today),
        ]

    def __repr__(self) -> str:
        return f"GridCell({format_date(self.date)}, label={self.label!r})"
