"""Main module for the calgrid package."""
import os
import sys
import logging
import argparse
from datetime import datetime
from typing import List, Optional
from dotenv import load_dotenv

from .context import CalendarContext, SUNDAY
from .errors import CalendarError, ConfigurationError
from .engine.controller import GridCalendar
from .engine.grid_builder import CalendarMode
from .reports.grid_report import GridReport
from .utils.date_utils import parse_date, day_str
from .utils.file_utils import write_markdown

# --- Environment Setup ---
def load_environment():
    """Load environment variables from the calgrid.env file, if there is one."""
    env_file = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'calgrid.env')
    if os.path.exists(env_file):
        load_dotenv(env_file)

def get_env_var(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get an environment variable, falling back to a default.

    Args:
        key: Environment variable name
        default: Value used when the variable is unset or empty

    Returns:
        Environment variable value or default
    """
    value = os.getenv(key)
    return value if value else default

def build_context(tz_name: Optional[str] = None, week_start: Optional[int] = None) -> CalendarContext:
    """Build the calendar context from arguments, then the environment.

    Args:
        tz_name: IANA timezone name (optional, CALGRID_TIMEZONE or host zone)
        week_start: Week start day, 0=Mon .. 6=Sun (optional, CALGRID_WEEK_START or Sunday)

    Returns:
        Calendar context

    Raises:
        ConfigurationError: If a setting is invalid
    """
    if week_start is None:
        raw = get_env_var("CALGRID_WEEK_START", str(SUNDAY))
        try:
            week_start = int(raw)
        except ValueError:
            raise ConfigurationError(f"CALGRID_WEEK_START must be a number 0..6, got {raw!r}")
    tz_name = tz_name or get_env_var("CALGRID_TIMEZONE")
    return CalendarContext(first_weekday=week_start, timezone=tz_name)

class ConsoleObserver:
    """Prints every notification a calendar sends."""

    def __init__(self, stream=None):
        self.stream = stream
        self.grid_updates = 0
        self.selection_updates = 0

    def on_display_dates_changed(self, dates: List[datetime], calendar: GridCalendar) -> None:
        self.grid_updates += 1
        print(f"[INFO] Grid: {day_str(calendar.context, dates[0])} → {day_str(calendar.context, dates[-1])} ({len(dates)} days)",
              file=self.stream or sys.stdout)

    def on_selected_date_changed(self, date: datetime, calendar: GridCalendar) -> None:
        self.selection_updates += 1
        print(f"[INFO] Selected: {day_str(calendar.context, date)}", file=self.stream or sys.stdout)

# --- CLI Logic ---
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (optional, defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Show the dates a month or week calendar grid displays.",
        epilog="""
Examples:
    # Show the month containing today
  calgrid
    ---
    # Show February 2024 with weeks starting on Monday, and mark the 15th as selected
  calgrid --date 2024-02-15 --weekstart 0 --select 2024-02-15
    ---
    # Show the week containing 2024-02-15, two weeks later
  calgrid --mode week --date 2024-02-15 --next 2
    ---
    # Show the previous month with a summary and export it to CSV files with prefix 'feb'
  calgrid --date 2024-03-10 --prev 1 --info --csv feb
    ---
    # Append the grid to a markdown file
  calgrid --date 2024-02-15 --md calendar.md

""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog="calgrid"
    )
    parser.add_argument('--date', help='Reference date (YYYY-MM-DD, default: today)')
    parser.add_argument('--mode', choices=[m.value for m in CalendarMode], default=None, help='Display mode: month (default) or week')
    parser.add_argument('--weekstart', type=int, choices=range(0, 7), default=None, help='Week start day: 0=Mon, 6=Sun (default: 6)')
    parser.add_argument('--tz', help='IANA timezone, e.g. Europe/Berlin (default: host timezone)')
    parser.add_argument('--next', type=int, default=0, metavar='N', help='Move N months (week mode: weeks) forward')
    parser.add_argument('--prev', type=int, default=0, metavar='N', help='Move N months (week mode: weeks) back')
    parser.add_argument('--select', help='Mark a date as selected (YYYY-MM-DD)')
    parser.add_argument('--info', action='store_true', help='Add a summary table of the calendar state')
    parser.add_argument('--csv', help='Export tables to CSV (provide filename prefix)')
    parser.add_argument('--md', help='Export output as markdown to the given file path')
    parser.add_argument('--overwrite', action='store_true', help='Explicitly overwrite the markdown file if it exists (DANGEROUS)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Print change notifications and debug logging')
    return parser.parse_args(argv)

def navigate(calendar: GridCalendar, steps: int) -> None:
    """Step the calendar forward (positive) or back (negative) one page at a time.

    Args:
        calendar: Calendar to move
        steps: Number of months, or weeks in week mode
    """
    if calendar.mode is CalendarMode.WEEK:
        forward, back = calendar.move_to_next_week, calendar.move_to_previous_week
    else:
        forward, back = calendar.move_to_next_month, calendar.move_to_previous_month
    step = forward if steps > 0 else back
    for _ in range(abs(steps)):
        step()

def calendar_interface(date_str: Optional[str] = None, mode: Optional[str] = None, week_start: Optional[int] = None,
                       tz_name: Optional[str] = None, steps: int = 0, select_str: Optional[str] = None,
                       info: bool = False, csv_prefix: Optional[str] = None, md_path: Optional[str] = None,
                       overwrite: bool = False, verbose: bool = False) -> GridCalendar:
    """Main interface for printing a calendar grid.

    Args:
        date_str: Reference date string (YYYY-MM-DD)
        mode: Display mode (month, week)
        week_start: Day of week to start on (0=Monday, 6=Sunday)
        tz_name: IANA timezone name
        steps: Months (or weeks) to move from the reference date
        select_str: Date to select (YYYY-MM-DD)
        info: Whether to include the summary table
        csv_prefix: Prefix for CSV files
        md_path: Path to export markdown
        overwrite: Whether to overwrite existing markdown file
        verbose: Whether to print change notifications

    Returns:
        The calendar after navigation and selection

    Raises:
        CalendarError: If a date, mode or setting is invalid
    """
    ctx = build_context(tz_name, week_start)
    mode = mode or get_env_var("CALGRID_MODE", CalendarMode.MONTH.value)
    reference = parse_date(ctx, date_str) if date_str else None

    observer = ConsoleObserver() if verbose else None
    calendar = GridCalendar(ctx, current_date=reference, mode=mode, observer=observer)

    navigate(calendar, steps)
    if select_str:
        calendar.update_selected_date(parse_date(ctx, select_str))

    grid_report = GridReport(calendar)
    report = grid_report.generate_report(csv_prefix, summary=info)

    if md_path:
        write_markdown(md_path, f"\n{report}\n", grid_report.title, overwrite)
        print(f"[SUCCESS] Markdown output written to '{md_path}'")
    else:
        print(report)
    return calendar

def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    # Load environment variables
    load_environment()

    # Parse command line arguments
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        calendar_interface(
            args.date, args.mode, args.weekstart, args.tz,
            args.next - args.prev, args.select, args.info,
            args.csv, args.md, args.overwrite, args.verbose
        )
    except CalendarError as e:
        print(f"[ERROR] {e}")
        sys.exit(2)

if __name__ == "__main__":
    main()
