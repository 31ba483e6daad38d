"""Formatting utility functions for calgrid."""
from datetime import datetime
from typing import List

WEEKDAY_ABBR = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
MONTH_NAMES = ["January", "February", "March", "April", "May", "June", "July",
               "August", "September", "October", "November", "December"]

SELECTED_MARK = "*"
TODAY_MARK = "!"


def weekday_headers(first_weekday: int) -> List[str]:
    """Get weekday abbreviations in display order.

    Args:
        first_weekday: Day the week starts on (0=Monday, 6=Sunday)

    Returns:
        Seven abbreviations, starting with first_weekday
    """
    return [WEEKDAY_ABBR[(first_weekday + i) % 7] for i in range(7)]


def month_title(year: int, month: int) -> str:
    """Format a month heading, e.g. "February 2024"."""
    return f"{MONTH_NAMES[month - 1]} {year}"


def format_cell(day: int, in_month: bool = True, selected: bool = False, today: bool = False) -> str:
    """Format one grid cell.

    Args:
        day: Day of month
        in_month: Whether the day belongs to the displayed month
        selected: Whether the day is the selected date
        today: Whether the day is today

    Returns:
        Cell text; days from adjacent months are parenthesized,
        "*" marks the selection and "!" marks today
    """
    text = f"{day:2d}" if in_month else f"({day})"
    if selected:
        text += SELECTED_MARK
    if today:
        text += TODAY_MARK
    return text


def format_date(dt: datetime) -> str:
    """Format a datetime as YYYY-MM-DD, or an empty string for None."""
    return dt.strftime("%Y-%m-%d") if dt else ""


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"
