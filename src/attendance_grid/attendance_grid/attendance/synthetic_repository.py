from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import today_local
from ..core.enums import AttendanceStatus
from ..period.model import DateRange
from ..period.workdays import enumerate_workdays
from .model import AttendanceRecord, EditSession, RecordBatch

_BOB_CYCLE = (
    (AttendanceStatus.PRESENT, "09:50"),
    (AttendanceStatus.ABSENT, None),
    (AttendanceStatus.LATE, "10:15"),
    (AttendanceStatus.VACATION, None),
    (AttendanceStatus.OFFICIAL_LEAVE, None),
)


def synthetic_status(employee_id: int, index: int) -> tuple[AttendanceStatus, Optional[str]]:
    """Deterministic (status, check-in time) for the ``index``-th workday of the visible range."""
    if employee_id == 1:
        if index % 10 == 0:
            return AttendanceStatus.VACATION, None
        return AttendanceStatus.PRESENT, "09:40"
    if employee_id == 2:
        if index % 5 == 0:
            return AttendanceStatus.LATE, "10:15"
        return AttendanceStatus.ABSENT, None
    if employee_id == 3:
        return _BOB_CYCLE[index % len(_BOB_CYCLE)]
    return AttendanceStatus.NOT_YET, None


class SyntheticAttendanceRepository:
    """Mock data source: generated records plus status overrides kept in memory."""

    not_yet_editable = False

    def __init__(self, *, clock: Callable[[], date] = today_local):
        self._clock = clock
        self._lock = threading.Lock()
        self._status_overrides: dict[tuple[int, date], AttendanceStatus] = {}

    def records_for(self, employee_id: int, date_range: DateRange) -> Sequence[AttendanceRecord]:
        today = self._clock()
        with self._lock:
            overrides = dict(self._status_overrides)

        out: list[AttendanceRecord] = []
        for index, day in enumerate(enumerate_workdays(date_range)):
            if day >= today:
                out.append(AttendanceRecord(employee_id, day, AttendanceStatus.NOT_YET))
                continue

            status, check_in = synthetic_status(employee_id, index)
            record = AttendanceRecord(employee_id, day, status, time=check_in)
            override = overrides.get((employee_id, day))
            if override is not None:
                record = replace(record, status=override)
            out.append(record)
        return out

    def records_for_many(self, employee_ids: Iterable[int], date_range: DateRange) -> RecordBatch:
        return RecordBatch(records={eid: list(self.records_for(eid, date_range)) for eid in employee_ids})

    def save(self, edit: EditSession) -> None:
        # Only the status is kept; time/comment edits are not stored by this backend.
        with self._lock:
            self._status_overrides[(edit.employee_id, edit.attendance_date)] = edit.status
