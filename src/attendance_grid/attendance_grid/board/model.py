from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import column_label, format_iso_date
from ..core.enums import AttendanceStatus, ViewMode
from ..employees.model import Employee, LeaveControl
from ..period.model import DateRange

STATUS_CSS = {
    AttendanceStatus.PRESENT: "cell-present",
    AttendanceStatus.ABSENT: "cell-absent",
    AttendanceStatus.VACATION: "cell-vacation",
    AttendanceStatus.LATE: "cell-late",
    AttendanceStatus.OFFICIAL_LEAVE: "cell-official-leave",
    AttendanceStatus.NOT_YET: "cell-not-yet",
}


@dataclass(frozen=True)
class GridCell:
    employee_id: int
    work_date: date
    status: AttendanceStatus
    time: Optional[str] = None
    comment: Optional[str] = None
    editable: bool = True

    @property
    def date_key(self) -> str:
        return format_iso_date(self.work_date)

    @property
    def label(self) -> str:
        return "" if self.status is AttendanceStatus.NOT_YET else self.status.value

    @property
    def suffix(self) -> str:
        """``(HH:MM)`` for PRESENT/LATE, ``(comment)`` for OFFICIAL_LEAVE, else empty."""
        if self.status.takes_time and self.time:
            return f"({self.time})"
        if self.status.takes_comment and self.comment:
            return f"({self.comment})"
        return ""

    @property
    def css_class(self) -> str:
        return STATUS_CSS[self.status]

    def to_record(self) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=self.employee_id,
            attendance_date=self.work_date,
            status=self.status,
            time=self.time,
            comment=self.comment,
        )


@dataclass(frozen=True)
class GridRow:
    employee: Employee
    cells: tuple[GridCell, ...]
    leave_controls: tuple[LeaveControl, ...] = ()


@dataclass(frozen=True)
class AttendanceGrid:
    """Read-model of the attendance table for one view mode (optimized for rendering)."""

    view_mode: ViewMode
    date_range: DateRange
    columns: tuple[date, ...]
    rows: tuple[GridRow, ...]
    penalty_unit: str = ""
    failed_employee_ids: frozenset[int] = frozenset()
    employees_stale: bool = False

    @property
    def employees(self) -> tuple[Employee, ...]:
        return tuple(r.employee for r in self.rows)

    @property
    def column_labels(self) -> list[str]:
        return [column_label(d) for d in self.columns]

    def row(self, employee_id: int) -> Optional[GridRow]:
        for r in self.rows:
            if r.employee.employee_id == employee_id:
                return r
        return None

    def cell(self, employee_id: int, work_date: date) -> Optional[GridCell]:
        r = self.row(employee_id)
        if not r:
            return None
        for c in r.cells:
            if c.work_date == work_date:
                return c
        return None

    def to_dict(self) -> dict:
        return {
            "viewMode": self.view_mode.value,
            "startDate": format_iso_date(self.date_range.start),
            "endDate": format_iso_date(self.date_range.end),
            "columns": [format_iso_date(d) for d in self.columns],
            "penaltyUnit": self.penalty_unit,
            "failedEmployeeIds": sorted(self.failed_employee_ids),
            "employees": [
                {
                    "id": r.employee.employee_id,
                    "name": r.employee.name,
                    "remainingLeaveDays": r.employee.remaining_leave_days,
                    "penalty": r.employee.penalty,
                    "attendance": [
                        {
                            "attendanceDate": c.date_key,
                            "status": c.status.value,
                            "time": c.time or "",
                            "comment": c.comment or "",
                            "editable": c.editable,
                        }
                        for c in r.cells
                    ],
                }
                for r in self.rows
            ],
        }
