from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord, EditSession, RecordBatch
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_iso_date, today_local
from ..core.constants import DEFAULT_WEEK_STARTS_ON
from ..core.enums import AttendanceStatus, ViewMode
from ..core.exceptions import UpstreamError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..employees.service import LeaveBalanceService
from ..period.model import DateRange
from ..period.selector import select_range
from ..period.workdays import enumerate_workdays
from .model import AttendanceGrid, GridCell, GridRow
from .state import BoardState

logger = logging.getLogger(__name__)


class BoardService:
    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        *,
        leave_service: Optional[LeaveBalanceService] = None,
        clock: Callable[[], date] = today_local,
        week_starts_on: int = DEFAULT_WEEK_STARTS_ON,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leave = leave_service or LeaveBalanceService(employees)
        self._clock = clock
        self._week_starts_on = int(week_starts_on)

    def select_range(self, view_mode: ViewMode) -> DateRange:
        return select_range(view_mode, self._clock(), week_starts_on=self._week_starts_on)

    def load(self, state: BoardState, view_mode: Optional[ViewMode] = None) -> AttendanceGrid:
        """Select the range for ``view_mode`` and (re)load the whole table for it.

        An employee-list failure keeps the employees of the previous grid. A load
        overtaken by a newer one still returns its grid but does not publish it.
        """
        mode = view_mode or state.view_mode
        date_range = self.select_range(mode)
        ticket = state.begin_load(mode, date_range)

        employees_stale = False
        try:
            employees = list(self._employees.list_all())
        except UpstreamError as e:
            logger.error("Error fetching employees: %s", e)
            employees = list(state.grid.employees) if state.grid else []
            employees_stale = True

        try:
            batch = self._attendance.records_for_many([e.employee_id for e in employees], date_range)
        except Exception as e:
            state.fail_load(ticket, str(e))
            raise

        grid = self.build_grid(mode, date_range, employees, batch, employees_stale=employees_stale)
        if not state.finish_load(ticket, grid):
            logger.info("Discarded outdated %s load (generation %s)", mode.value, ticket)
        return grid

    def build_grid(
        self,
        view_mode: ViewMode,
        date_range: DateRange,
        employees: Sequence[Employee],
        batch: RecordBatch,
        *,
        employees_stale: bool = False,
    ) -> AttendanceGrid:
        columns = enumerate_workdays(date_range)
        rows = []
        for employee in employees:
            by_key = {r.date_key: r for r in batch.records.get(employee.employee_id, [])}
            cells = tuple(self._to_cell(employee.employee_id, day, by_key.get(format_iso_date(day))) for day in columns)
            rows.append(GridRow(employee=employee, cells=cells, leave_controls=tuple(self._leave.controls_for(employee))))

        return AttendanceGrid(
            view_mode=view_mode,
            date_range=date_range,
            columns=columns,
            rows=tuple(rows),
            penalty_unit=self._employees.penalty_unit,
            failed_employee_ids=batch.failed,
            employees_stale=employees_stale,
        )

    def _to_cell(self, employee_id: int, day: date, record: Optional[AttendanceRecord]) -> GridCell:
        if record is None or record.status is AttendanceStatus.NOT_YET:
            return GridCell(
                employee_id=employee_id,
                work_date=day,
                status=AttendanceStatus.NOT_YET,
                editable=self._attendance.not_yet_editable,
            )
        return GridCell(
            employee_id=employee_id,
            work_date=day,
            status=record.status,
            time=record.time,
            comment=record.comment,
        )

    def open_edit(self, state: BoardState, grid: AttendanceGrid, employee_id: int, day: date) -> EditSession:
        row = grid.row(employee_id)
        cell = grid.cell(employee_id, day)
        if not row or not cell:
            raise ValidationError("That cell is not part of the current view")
        if not cell.editable:
            raise ValidationError("This day has no attendance yet")

        edit = EditSession.open(employee_id=employee_id, employee_name=row.employee.name, record=cell.to_record())
        state.open_edit(edit)
        return edit

    def commit_edit(self, state: BoardState, *, status: str, time: str = "", comment: str = "") -> EditSession:
        """Validate the form input and store it through the active backend.

        Callers reload the board afterwards. When the save fails the session is
        closed and the previous grid is left untouched.
        """
        if state.edit is None:
            raise ValidationError("No attendance edit is open")
        edit = state.edit.apply(status=status, time=time, comment=comment)
        state.update_edit(edit)

        state.begin_save()
        try:
            self._attendance.save(edit)
        except UpstreamError as e:
            logger.error("Error updating attendance: %s", e)
            state.fail_save(str(e))
            raise
        except Exception:
            logger.exception("Unexpected error while saving attendance")
            state.fail_save("System error while saving attendance")
            raise
        state.finish_save()
        return edit

    def adjust_leave(self, state: BoardState, employee_id: int, delta: float) -> Employee:
        grid = state.grid or self.load(state)
        row = grid.row(employee_id)
        if not row:
            raise ValidationError("Employee is not shown on the board")
        self._leave.adjust(row.employee, delta)
        return row.employee
