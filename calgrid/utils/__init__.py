"""Utility modules for calgrid."""

from .date_utils import (
    first_day_of_month, days_in_month, days_in_week, weekday_ordinal_of_first_day,
    add_days, add_months, month_of, year_of, is_same_day, get_week_range, get_month_range, day_str,
)
from .format_utils import weekday_headers, month_title, format_cell
from .file_utils import write_csv, write_markdown

__all__ = [
    'first_day_of_month', 'days_in_month', 'days_in_week', 'weekday_ordinal_of_first_day',
    'add_days', 'add_months', 'month_of', 'year_of', 'is_same_day', 'get_week_range', 'get_month_range', 'day_str',
    'weekday_headers', 'month_title', 'format_cell',
    'write_csv', 'write_markdown'
]
