"""Date formatting and calendar helpers for estimate presentation."""

import calendar
import math
from datetime import datetime, timezone
from typing import Optional


def format_date(date: datetime) -> str:
    """Format a date in US long form, e.g. "July 18, 2025"."""
    date = date.astimezone(timezone.utc)
    return f"{calendar.month_name[date.month]} {date.day}, {date.year}"


def add_months(date: datetime, months: int) -> datetime:
    """Shift a date by whole calendar months, clamping the day to month end."""
    month_index = date.month - 1 + months
    year = date.year + month_index // 12
    month = month_index % 12 + 1
    day = min(date.day, calendar.monthrange(year, month)[1])
    return date.replace(year=year, month=month, day=day)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def human_age(created: datetime, now: Optional[datetime] = None) -> str:
    """
    Render the time elapsed since a date, e.g. "2 years and 3 months".

    Months are counted as 30 days and years as 12 months.
    """
    now = now or datetime.now(timezone.utc)
    elapsed = abs(now - created)
    days = math.ceil(elapsed.total_seconds() / 86400)
    months = days // 30
    years = months // 12

    if years > 0:
        remaining_months = months % 12
        if remaining_months > 0:
            return f"{_plural(years, 'year')} and {_plural(remaining_months, 'month')}"
        return _plural(years, "year")
    if months > 0:
        return _plural(months, "month")
    return _plural(days, "day")
