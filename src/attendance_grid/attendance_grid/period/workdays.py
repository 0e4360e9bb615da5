from __future__ import annotations

from datetime import date, timedelta

from .model import DateRange

SATURDAY = 5


def is_weekend(value: date) -> bool:
    return value.weekday() >= SATURDAY


def enumerate_workdays(date_range: DateRange) -> tuple[date, ...]:
    """Every Monday-Friday date of the range, ascending."""
    days = (date_range.start + timedelta(days=i) for i in range(date_range.days))
    return tuple(d for d in days if not is_weekend(d))
