from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..common.validators import optional_time
from ..core.enums import EDITABLE_STATUSES, AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one employee on one date."""

    employee_id: int
    attendance_date: date
    status: AttendanceStatus
    time: Optional[str] = None
    comment: Optional[str] = None

    @property
    def date_key(self) -> str:
        return format_iso_date(self.attendance_date)


@dataclass(frozen=True)
class RecordBatch:
    """Merged result of a multi-employee lookup.

    Employees whose lookup failed are missing from ``records`` and listed in ``failed``.
    """

    records: dict[int, list[AttendanceRecord]] = field(default_factory=dict)
    failed: frozenset[int] = frozenset()


@dataclass(frozen=True)
class EditSession:
    """Candidate change of one cell, pending confirmation in the edit form."""

    employee_id: int
    employee_name: str
    attendance_date: date
    status: AttendanceStatus
    time: str = ""
    comment: str = ""

    @classmethod
    def open(
        cls,
        *,
        employee_id: int,
        employee_name: str,
        record: AttendanceRecord,
    ) -> "EditSession":
        status = record.status
        if status not in EDITABLE_STATUSES:
            status = AttendanceStatus.PRESENT
        return cls(
            employee_id=employee_id,
            employee_name=employee_name,
            attendance_date=record.attendance_date,
            status=status,
            time=record.time or "",
            comment=record.comment or "",
        )

    def apply(self, *, status: str, time: str = "", comment: str = "") -> "EditSession":
        """Return the session with the operator's form input applied and validated.

        Time is kept only for PRESENT/LATE and comment only for OFFICIAL_LEAVE.
        """
        new_status = AttendanceStatus.parse(status)
        if new_status not in EDITABLE_STATUSES:
            raise ValidationError(f"{new_status.value} cannot be set manually")

        new_time = optional_time(time) if new_status.takes_time else ""
        new_comment = (comment or "").strip() if new_status.takes_comment else ""
        return replace(self, status=new_status, time=new_time, comment=new_comment)

    def to_payload(self) -> dict:
        """Wire body of an attendance write."""
        return {
            "userId": self.employee_id,
            "attendanceDate": format_iso_date(self.attendance_date),
            "status": self.status.value,
            "comment": self.comment if self.status.takes_comment else "",
            "time": self.time if self.status.takes_time else "",
        }
