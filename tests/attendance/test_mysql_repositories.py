from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import mysql.connector
import pytest

from staff_attendance.attendance.model import AttendanceRecord
from staff_attendance.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from staff_attendance.core.enums import ClockStatus
from staff_attendance.core.exceptions import StoreUnavailable
from staff_attendance.employees.model import EmployeeProfile
from staff_attendance.employees.mysql_employee_repository import MySQLEmployeeRepository


class FakeCursor:
    def __init__(self, rows=None, fail=False):
        self.rows = rows or []
        self.fail = fail
        self.executed = []
        self.closed = False

    def execute(self, sql, params=()):
        if self.fail:
            raise mysql.connector.Error("lost connection")
        self.executed.append((" ".join(sql.split()), params))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, cursor=None, refuse=False):
        self.cursor = cursor or FakeCursor()
        self.refuse = refuse
        self.connections = []

    def connect(self):
        if self.refuse:
            raise mysql.connector.Error("connection refused")
        conn = FakeConnection(self.cursor)
        self.connections.append(conn)
        return conn


def test_query_builds_half_open_window():
    row = {
        "record_key": "E1_2026-03-02T09:00:00",
        "employee_id": "E1",
        "company_name": "Acme",
        "employee_name": "Sara",
        "status": "Clock In",
        "latitude": 24.9,
        "longitude": 67.05,
        "timestamp": datetime(2026, 3, 2, 9, 0),
    }
    factory = FakeFactory(FakeCursor(rows=[row]))
    repo = MySQLAttendanceRepository(factory)

    records = repo.query_attendance(
        employee_id="E1", start=datetime(2026, 3, 2), end=datetime(2026, 3, 3)
    )

    sql, params = factory.cursor.executed[0]
    assert "WHERE employee_id=%s AND `timestamp` >= %s AND `timestamp` < %s" in sql
    assert params == ("E1", datetime(2026, 3, 2), datetime(2026, 3, 3))
    assert records[0].status == ClockStatus.CLOCK_IN
    assert factory.connections[0].committed and factory.connections[0].closed


def test_query_without_filters_reads_everything():
    factory = FakeFactory()
    MySQLAttendanceRepository(factory).query_attendance()

    sql, params = factory.cursor.executed[0]
    assert "WHERE" not in sql
    assert params == ()


def test_aware_timestamps_stored_as_local_wall_clock():
    tz = ZoneInfo("Asia/Karachi")
    factory = FakeFactory()
    repo = MySQLAttendanceRepository(factory, tz=tz)
    ts = datetime(2026, 3, 2, 9, 0, tzinfo=tz)
    record = AttendanceRecord(
        record_key=AttendanceRecord.make_key("E1", ts),
        employee_id="E1",
        company_name="Acme",
        employee_name="Sara",
        status=ClockStatus.CLOCK_IN,
        latitude=1.0,
        longitude=2.0,
        timestamp=ts,
    )

    repo.put_attendance(record.record_key, record)

    _, params = factory.cursor.executed[0]
    assert params[0] == "E1_2026-03-02T09:00:00+05:00"
    assert params[4] == "Clock In"
    assert params[7] == datetime(2026, 3, 2, 9, 0)


def test_driver_errors_become_store_unavailable():
    factory = FakeFactory(FakeCursor(fail=True))
    repo = MySQLEmployeeRepository(factory)

    with pytest.raises(StoreUnavailable):
        repo.put_employee(EmployeeProfile("E1", "Acme", "Sara"))
    assert factory.connections[0].rolled_back
    assert not factory.connections[0].committed

    with pytest.raises(StoreUnavailable):
        MySQLEmployeeRepository(FakeFactory(refuse=True)).get_employee("E1")


def test_employee_lookup_maps_row():
    factory = FakeFactory(FakeCursor(rows=[{"employee_id": 7, "company_name": "Acme", "employee_name": None}]))
    profile = MySQLEmployeeRepository(factory).get_employee("7")

    assert profile == EmployeeProfile("7", "Acme", "")
