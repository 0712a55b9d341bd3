"""Calendar-day helpers for due dates and the ledger clock."""

import calendar
from datetime import date, datetime


def add_months(start: date, months: int) -> date:
    """Advance ``start`` by whole calendar months.

    The day of month is clamped to the last day of the target month, so
    Jan 31 + 1 month is Feb 28 (Feb 29 in leap years). Each due date is
    computed from the same start date, which keeps a clamp in one month from
    shifting the following ones (Jan 31, Feb 28, Mar 31, ...).
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def as_calendar_day(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value
