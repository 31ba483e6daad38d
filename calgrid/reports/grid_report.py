"""GridReport class for printing a calendar grid as tables."""
from io import StringIO
from typing import List, Optional

from tabulate import tabulate

from .grid_cell import GridCell
from ..engine.controller import GridCalendar
from ..engine.grid_builder import CalendarMode, grid_rows
from ..utils.date_utils import get_week_range, get_month_range, month_of, year_of
from ..utils.format_utils import weekday_headers, month_title, format_date

CELL_HEADERS = ["#", "Date", "Weekday", "Week", "In Month", "Selected", "Today"]


class GridReport:
    """Renders the current state of a GridCalendar."""

    def __init__(self, calendar: GridCalendar):
        """Initialize a GridReport.

        Args:
            calendar: Calendar to render
        """
        self.calendar = calendar
        self.cells = [GridCell(d, calendar, idx) for idx, d in enumerate(calendar.dates)]

    @property
    def title(self) -> str:
        """Get the heading for the displayed span."""
        ctx = self.calendar.context
        current = self.calendar.current_date
        if self.calendar.mode is CalendarMode.WEEK:
            start, end = get_week_range(ctx, current)
            return f"Week {format_date(start)} to {format_date(end)}"
        return month_title(year_of(ctx, current), month_of(ctx, current))

    def generate_report(self, csv_prefix: Optional[str] = None, summary: bool = False) -> str:
        """Generate the grid table and, optionally, the summary table.

        Args:
            csv_prefix: Prefix for CSV files (optional)
            summary: Whether to add the summary table

        Returns:
            Report as a string
        """
        output = StringIO()
        self._generate_grid_table(output, csv_prefix)
        if summary:
            self._generate_summary_table(output, csv_prefix)
        return output.getvalue()

    def _generate_grid_table(self, output: StringIO, csv_prefix: Optional[str] = None):
        """Generate the week-by-week grid table.

        Args:
            output: StringIO to write to
            csv_prefix: Prefix for CSV files (optional)
        """
        headers = weekday_headers(self.calendar.context.first_weekday)
        rows = [[cell.label for cell in week] for week in grid_rows(self.cells)]

        print(f"\n### {self.title}:", file=output)
        print(tabulate(rows, headers=headers, tablefmt="github", stralign="right", disable_numparse=True), file=output)

        if csv_prefix:
            from ..utils.file_utils import write_csv
            write_csv(f"{csv_prefix}_grid.csv", CELL_HEADERS, [cell.to_row() for cell in self.cells])

    def _generate_summary_table(self, output: StringIO, csv_prefix: Optional[str] = None):
        """Generate the calendar state summary.

        Args:
            output: StringIO to write to
            csv_prefix: Prefix for CSV files (optional)
        """
        cal = self.calendar
        ctx = cal.context
        dates = cal.dates
        month_start, month_end = get_month_range(ctx, cal.current_date)
        summary_table: List[List[str]] = [
            ["Mode", cal.mode.value],
            ["Reference", format_date(cal.current_date)],
            ["Selected", format_date(cal.selected_date) or "-"],
            ["First", format_date(dates[0])],
            ["Last", format_date(dates[-1])],
            ["Items", str(cal.get_number_of_items_for_current_mode())],
            ["Month", f"{format_date(month_start)} to {format_date(month_end)}"],
            ["Days in Month", str(cal.get_number_of_days_in_month(cal.current_date))],
            ["Week Start", weekday_headers(ctx.first_weekday)[0]],
            ["Timezone", ctx.timezone_name],
        ]

        print(f"\n### Summary {self.title}:", file=output)
        print(tabulate(summary_table, headers=["Field", "Value"], tablefmt="github"), file=output)

        if csv_prefix:
            from ..utils.file_utils import write_csv
            write_csv(f"{csv_prefix}_summary.csv", ["Field", "Value"], summary_table)

        print(file=output)
