from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class AttendanceStatus(str, Enum):
    """Attendance status of one employee on one workday."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    VACATION = "VACATION"
    LATE = "LATE"
    OFFICIAL_LEAVE = "OFFICIAL_LEAVE"
    NOT_YET = "NOT_YET"

    @classmethod
    def parse(cls, value: str) -> "AttendanceStatus":
        """Accept both the API casing (``OFFICIAL_LEAVE``) and the legacy mock casing (``OfficialLeave``)."""
        if not isinstance(value, str):
            raise ValidationError(f"Unknown attendance status: {value!r}")
        raw = value.strip()
        key = raw.replace(" ", "_").upper()
        if key in cls.__members__:
            return cls[key]
        legacy = {"OFFICIALLEAVE": cls.OFFICIAL_LEAVE, "NOTYET": cls.NOT_YET}
        if key in legacy:
            return legacy[key]
        raise ValidationError(f"Unknown attendance status: {value!r}")

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def takes_time(self) -> bool:
        return self in TIME_STATUSES

    @property
    def takes_comment(self) -> bool:
        return self is AttendanceStatus.OFFICIAL_LEAVE


# Statuses an operator may pick in the edit form (NOT_YET is a display default only).
EDITABLE_STATUSES = (
    AttendanceStatus.PRESENT,
    AttendanceStatus.ABSENT,
    AttendanceStatus.VACATION,
    AttendanceStatus.LATE,
    AttendanceStatus.OFFICIAL_LEAVE,
)

TIME_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


class ViewMode(str, Enum):
    """How much calendar time the grid shows at once."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def parse(cls, value: str) -> "ViewMode":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown view mode: {value!r}")


class BoardPhase(str, Enum):
    """Lifecycle of an operator's board view."""

    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    EDITING = "EDITING"
    SAVING = "SAVING"
    ERROR = "ERROR"
