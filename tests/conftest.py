from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from staff_attendance.attendance.gate import AttendanceGate
from staff_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from staff_attendance.attendance.model import Coordinates
from staff_attendance.employees.memory_employee_repository import InMemoryEmployeeRepository
from staff_attendance.employees.model import EmployeeProfile


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def profile() -> EmployeeProfile:
    return EmployeeProfile(employee_id="E1", company_name="E& Field Services", employee_name="Ahmed Khan")


@pytest.fixture
def coords() -> Coordinates:
    return Coordinates(latitude=24.90, longitude=67.05)


@pytest.fixture
def employees_repo(profile) -> InMemoryEmployeeRepository:
    return InMemoryEmployeeRepository([profile])


@pytest.fixture
def attendance_repo() -> InMemoryAttendanceRepository:
    return InMemoryAttendanceRepository()


@pytest.fixture
def gate(attendance_repo, clock) -> AttendanceGate:
    return AttendanceGate(attendance_repo, clock=clock)
