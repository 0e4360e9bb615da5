"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_VIEW_MODE = "week"
DEFAULT_WEEK_STARTS_ON = 0  # Monday
ALL_TIME_MONTHS = 12
DEFAULT_HTTP_TIMEOUT = 20
DEFAULT_FETCH_WORKERS = 8

ISO_DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

LEAVE_DAY_DELTAS = (1.0, 0.5, -0.5, -1.0)
