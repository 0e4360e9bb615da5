from __future__ import annotations

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from ..core.constants import ALL_TIME_MONTHS, DEFAULT_WEEK_STARTS_ON
from ..core.enums import ViewMode
from .model import DateRange


def week_bounds(today: date, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> DateRange:
    """Week containing ``today``; ``week_starts_on`` uses ``date.weekday()`` numbering (0 = Monday)."""
    offset = (today.weekday() - week_starts_on) % 7
    start = today - timedelta(days=offset)
    return DateRange(start=start, end=start + timedelta(days=6))


def month_bounds(today: date) -> DateRange:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return DateRange(start=today.replace(day=1), end=today.replace(day=last_day))


def select_range(view_mode: ViewMode, today: date, *, week_starts_on: int = DEFAULT_WEEK_STARTS_ON) -> DateRange:
    """Map a view mode to the date range it shows, anchored on ``today``."""
    if view_mode is ViewMode.DAY:
        return DateRange(start=today, end=today)
    if view_mode is ViewMode.WEEK:
        return week_bounds(today, week_starts_on)
    if view_mode is ViewMode.MONTH:
        return month_bounds(today)
    if view_mode is ViewMode.ALL:
        return DateRange(start=today - relativedelta(months=ALL_TIME_MONTHS), end=today)
    raise ValueError(f"Unhandled view mode: {view_mode!r}")
