from __future__ import annotations

import logging
from datetime import date

import pytest
import requests

from src.attendance_grid.attendance_grid.attendance.model import EditSession
from src.attendance_grid.attendance_grid.attendance.remote_repository import RemoteAttendanceRepository
from src.attendance_grid.attendance_grid.core.enums import AttendanceStatus
from src.attendance_grid.attendance_grid.core.exceptions import UpstreamError
from src.attendance_grid.attendance_grid.period.model import DateRange
from src.attendance_grid.attendance_grid.upstream.proxy import AttendanceProxy

WEEK = DateRange(date(2024, 3, 4), date(2024, 3, 10))


@pytest.fixture
def repo(upstream_client):
    return RemoteAttendanceRepository(upstream_client, AttendanceProxy(upstream_client), max_workers=4)


def test_records_are_requested_per_employee_and_range(repo, fake_session, fake_response):
    fake_session.route(
        "GET",
        "/attendance/records",
        fake_response(json_data=[{"attendanceDate": "2024-03-05", "status": "LATE", "time": "10:15"}]),
    )

    records = repo.records_for(7, WEEK)

    call = fake_session.calls_to("GET", "/attendance/records")[0]
    assert call["params"] == {"userId": 7, "startDate": "2024-03-04", "endDate": "2024-03-10"}
    assert len(records) == 1
    assert records[0].status == AttendanceStatus.LATE
    assert records[0].time == "10:15"
    assert records[0].date_key == "2024-03-05"


def test_unreadable_rows_are_skipped(repo, fake_session, fake_response):
    fake_session.route(
        "GET",
        "/attendance/records",
        fake_response(
            json_data=[
                {"attendanceDate": "2024-03-05T00:00:00", "status": "PRESENT"},
                {"attendanceDate": "2024-03-06", "status": "SICK"},
                {"attendanceDate": "2024-03-07", "status": "ABSENT"},
            ]
        ),
    )

    records = repo.records_for(1, WEEK)

    assert [r.date_key for r in records] == ["2024-03-07"]


def test_failed_employee_is_left_out_and_logged(repo, fake_session, fake_response, caplog):
    def handler(params, body):
        if params["userId"] == 2:
            return fake_response(503, text="down", content_type="text/plain")
        return fake_response(json_data=[{"attendanceDate": "2024-03-04", "status": "PRESENT", "time": "09:00"}])

    fake_session.route("GET", "/attendance/records", handler)

    with caplog.at_level(logging.ERROR):
        batch = repo.records_for_many([1, 2, 3], WEEK)

    assert set(batch.records) == {1, 3}
    assert batch.failed == frozenset({2})
    assert "employee 2" in caplog.text
    assert len(fake_session.calls_to("GET", "/attendance/records")) == 3


def test_non_string_fields_only_skip_that_row(repo, fake_session, fake_response):
    def handler(params, body):
        if params["userId"] == 2:
            return fake_response(
                json_data=[
                    {"attendanceDate": 20240305, "status": "PRESENT"},
                    {"attendanceDate": "2024-03-06", "status": 3},
                    {"attendanceDate": "2024-03-07", "status": "LATE", "time": "10:02"},
                ]
            )
        return fake_response(json_data=[{"attendanceDate": "2024-03-04", "status": "PRESENT"}])

    fake_session.route("GET", "/attendance/records", handler)

    batch = repo.records_for_many([1, 2, 3], WEEK)

    assert set(batch.records) == {1, 2, 3}
    assert batch.failed == frozenset()
    assert [r.date_key for r in batch.records[2]] == ["2024-03-07"]
    assert batch.records[1][0].status == AttendanceStatus.PRESENT


def test_transport_errors_count_as_failures(repo, fake_session):
    fake_session.route("GET", "/attendance/records", requests.ConnectionError("refused"))

    batch = repo.records_for_many([1], WEEK)

    assert batch.records == {}
    assert batch.failed == frozenset({1})


def test_no_employees_means_no_requests(repo, fake_session):
    assert repo.records_for_many([], WEEK).records == {}
    assert fake_session.calls == []


def test_save_puts_the_edit_through_the_proxy(repo, fake_session, fake_response):
    fake_session.route("PUT", "/attendance", fake_response(json_data={"ok": True}))
    edit = EditSession(
        employee_id=2,
        employee_name="Jane Smith",
        attendance_date=date(2024, 3, 5),
        status=AttendanceStatus.OFFICIAL_LEAVE,
        comment="medical",
    )

    repo.save(edit)

    assert fake_session.calls_to("PUT", "/attendance")[0]["json"] == {
        "userId": 2,
        "attendanceDate": "2024-03-05",
        "status": "OFFICIAL_LEAVE",
        "comment": "medical",
        "time": "",
    }


def test_save_failure_raises(repo, fake_session, fake_response):
    fake_session.route("PUT", "/attendance", fake_response(500, text="boom", content_type="text/plain"))
    edit = EditSession(
        employee_id=1,
        employee_name="John Doe",
        attendance_date=date(2024, 3, 5),
        status=AttendanceStatus.ABSENT,
    )

    with pytest.raises(UpstreamError):
        repo.save(edit)
