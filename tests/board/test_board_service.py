from __future__ import annotations

from datetime import date

import pytest

from src.attendance_grid.attendance_grid.attendance.model import RecordBatch
from src.attendance_grid.attendance_grid.attendance.synthetic_repository import SyntheticAttendanceRepository
from src.attendance_grid.attendance_grid.board.service import BoardService
from src.attendance_grid.attendance_grid.board.state import BoardState
from src.attendance_grid.attendance_grid.core.enums import AttendanceStatus, BoardPhase, ViewMode
from src.attendance_grid.attendance_grid.core.exceptions import UpstreamError, ValidationError
from src.attendance_grid.attendance_grid.employees.model import Employee
from src.attendance_grid.attendance_grid.employees.synthetic_repository import SyntheticEmployeeRepository
from src.attendance_grid.attendance_grid.period.model import DateRange

TODAY = date(2024, 3, 6)


class FlakyEmployees:
    penalty_unit = "points"

    def __init__(self, employees):
        self.employees = list(employees)
        self.fail = False

    def list_all(self):
        if self.fail:
            raise UpstreamError("HTTP error! status: 503")
        return list(self.employees)

    def adjust_leave_days(self, employee_id, delta):
        raise AssertionError("not used")


class ScriptedAttendance:
    """Attendance fake whose behaviour is set per test."""

    def __init__(self, *, not_yet_editable=True):
        self.not_yet_editable = not_yet_editable
        self.batch = RecordBatch()
        self.on_fetch = None
        self.save_error = None
        self.saved = []

    def records_for(self, employee_id, date_range):
        return self.batch.records.get(employee_id, [])

    def records_for_many(self, employee_ids, date_range):
        if self.on_fetch:
            self.on_fetch()
        return self.batch

    def save(self, edit):
        if self.save_error:
            raise self.save_error
        self.saved.append(edit)


@pytest.fixture
def synthetic_service():
    return BoardService(
        SyntheticEmployeeRepository(),
        SyntheticAttendanceRepository(clock=lambda: TODAY),
        clock=lambda: TODAY,
    )


def test_week_columns_are_weekdays_only(synthetic_service):
    state = BoardState()

    grid = synthetic_service.load(state, ViewMode.WEEK)

    assert grid.date_range == DateRange(date(2024, 3, 4), date(2024, 3, 10))
    assert grid.columns == tuple(date(2024, 3, d) for d in range(4, 9))
    assert grid.column_labels[0] == "Mon, Mar 4"
    assert state.phase == BoardPhase.LOADED
    assert state.grid is grid


def test_synthetic_rows(synthetic_service):
    grid = synthetic_service.load(BoardState(), ViewMode.WEEK)

    john = grid.row(1)
    assert [c.status for c in john.cells[:2]] == [AttendanceStatus.VACATION, AttendanceStatus.PRESENT]
    assert john.cells[1].suffix == "(09:40)"
    # Today and later have no attendance yet.
    assert all(c.status is AttendanceStatus.NOT_YET and not c.editable for c in john.cells[2:])
    assert john.cells[2].label == ""
    assert grid.penalty_unit == "KRW"


def test_day_view_shows_only_today(synthetic_service):
    grid = synthetic_service.load(BoardState(), ViewMode.DAY)

    assert grid.columns == (TODAY,)


def test_weekend_day_view_has_no_columns():
    saturday = date(2024, 3, 9)
    service = BoardService(
        SyntheticEmployeeRepository(),
        SyntheticAttendanceRepository(clock=lambda: saturday),
        clock=lambda: saturday,
    )

    grid = service.load(BoardState(), ViewMode.DAY)

    assert grid.columns == ()
    assert len(grid.rows) == 3
    assert all(r.cells == () for r in grid.rows)


def test_synthetic_not_yet_cell_cannot_be_edited(synthetic_service):
    state = BoardState()
    grid = synthetic_service.load(state, ViewMode.WEEK)

    with pytest.raises(ValidationError):
        synthetic_service.open_edit(state, grid, 1, TODAY)
    assert state.phase == BoardPhase.LOADED


def test_synthetic_save_replaces_status(synthetic_service):
    state = BoardState()
    grid = synthetic_service.load(state, ViewMode.WEEK)

    edit = synthetic_service.open_edit(state, grid, 2, date(2024, 3, 5))
    assert edit.status == AttendanceStatus.ABSENT
    synthetic_service.commit_edit(state, status="VACATION")

    assert state.phase == BoardPhase.LOADED
    grid = synthetic_service.load(state)
    assert grid.cell(2, date(2024, 3, 5)).status == AttendanceStatus.VACATION


def test_remote_not_yet_cell_opens_as_present():
    employees = FlakyEmployees([Employee(9, "Dana", 2.0)])
    service = BoardService(employees, ScriptedAttendance(), clock=lambda: TODAY)
    state = BoardState()
    grid = service.load(state, ViewMode.WEEK)

    cell = grid.cell(9, date(2024, 3, 8))
    assert cell.status is AttendanceStatus.NOT_YET
    assert cell.editable

    edit = service.open_edit(state, grid, 9, date(2024, 3, 8))
    assert edit.status == AttendanceStatus.PRESENT
    assert state.phase == BoardPhase.EDITING


def test_outdated_load_is_not_published():
    attendance = ScriptedAttendance()
    service = BoardService(FlakyEmployees([Employee(1, "A", 1.0)]), attendance, clock=lambda: TODAY)
    state = BoardState()

    # A newer selection arrives while the week is still being fetched.
    attendance.on_fetch = lambda: state.begin_load(ViewMode.MONTH, service.select_range(ViewMode.MONTH))
    week = service.load(state, ViewMode.WEEK)

    assert week.view_mode == ViewMode.WEEK
    assert state.grid is None
    assert state.view_mode == ViewMode.MONTH
    assert state.phase == BoardPhase.LOADING


def test_employee_list_failure_keeps_previous_employees(caplog):
    employees = FlakyEmployees([Employee(1, "A", 1.0), Employee(2, "B", 0.0)])
    service = BoardService(employees, ScriptedAttendance(), clock=lambda: TODAY)
    state = BoardState()
    service.load(state, ViewMode.WEEK)

    employees.fail = True
    grid = service.load(state, ViewMode.MONTH)

    assert [e.employee_id for e in grid.employees] == [1, 2]
    assert grid.employees_stale
    assert "Error fetching employees" in caplog.text


def test_failed_commit_leaves_grid_and_reports_error():
    attendance = ScriptedAttendance()
    service = BoardService(FlakyEmployees([Employee(1, "A", 1.0)]), attendance, clock=lambda: TODAY)
    state = BoardState()
    grid = service.load(state, ViewMode.WEEK)
    service.open_edit(state, grid, 1, date(2024, 3, 4))

    attendance.save_error = UpstreamError("HTTP error! status: 500")
    with pytest.raises(UpstreamError):
        service.commit_edit(state, status="LATE", time="10:05")

    assert state.phase == BoardPhase.ERROR
    assert state.error == "HTTP error! status: 500"
    assert state.grid is grid
    assert state.edit is None


def test_unexpected_save_error_does_not_block_reloads():
    attendance = ScriptedAttendance()
    service = BoardService(FlakyEmployees([Employee(1, "A", 1.0)]), attendance, clock=lambda: TODAY)
    state = BoardState()
    grid = service.load(state, ViewMode.WEEK)
    service.open_edit(state, grid, 1, date(2024, 3, 4))

    attendance.save_error = RuntimeError("disk full")
    with pytest.raises(RuntimeError):
        service.commit_edit(state, status="ABSENT")

    assert state.phase == BoardPhase.ERROR
    assert state.edit is None
    service.load(state, ViewMode.MONTH)
    assert state.phase == BoardPhase.LOADED


def test_commit_without_open_edit_is_rejected(synthetic_service):
    state = BoardState()
    synthetic_service.load(state)

    with pytest.raises(ValidationError):
        synthetic_service.commit_edit(state, status="PRESENT")


def test_invalid_time_keeps_edit_open():
    attendance = ScriptedAttendance()
    service = BoardService(FlakyEmployees([Employee(1, "A", 1.0)]), attendance, clock=lambda: TODAY)
    state = BoardState()
    grid = service.load(state, ViewMode.WEEK)
    service.open_edit(state, grid, 1, date(2024, 3, 4))

    with pytest.raises(ValidationError):
        service.commit_edit(state, status="PRESENT", time="25:99")

    assert state.phase == BoardPhase.EDITING
    assert attendance.saved == []
