from __future__ import annotations

import pytest

from staff_attendance.attendance.service import AttendanceService
from staff_attendance.attendance.session_state import AttendanceSessionState
from staff_attendance.core.enums import ClockStatus, DayStatus, RejectionReason
from staff_attendance.core.exceptions import EmployeeNotFound, MissingLocation, TransitionRejected, ValidationError
from staff_attendance.employees.service import EmployeeService


@pytest.fixture
def service(gate, employees_repo) -> AttendanceService:
    return AttendanceService(gate, EmployeeService(employees_repo))


def test_validate_rejects_blank_id(service):
    with pytest.raises(ValidationError, match="valid employee ID"):
        service.validate_employee(AttendanceSessionState(), "   ")


def test_validate_unknown_employee(service):
    with pytest.raises(EmployeeNotFound) as exc:
        service.validate_employee(AttendanceSessionState(), "NOPE")
    assert exc.value.employee_id == "NOPE"


def test_validate_fills_profile_without_touching_old_state(service, fixed_now):
    before = AttendanceSessionState()
    after = service.validate_employee(before, " E1 ", now=fixed_now)

    assert before.validated is False
    assert after.validated is True
    assert after.employee_name == "Ahmed Khan"
    assert after.day_status == DayStatus.CAN_CLOCK_IN
    assert after.next_action == ClockStatus.CLOCK_IN


def test_update_location_validates_ranges(service):
    state = AttendanceSessionState()

    with pytest.raises(ValidationError):
        service.update_location(state, 91, 10)
    with pytest.raises(ValidationError):
        service.update_location(state, "north", 10)

    assert service.update_location(state, "24.9", -67.05).coordinates is not None
    assert service.update_location(state, None, None).coordinates is None


def test_clock_requires_validation(service):
    with pytest.raises(ValidationError, match="validate your employee ID"):
        service.clock(AttendanceSessionState())


def test_clock_without_location(service, fixed_now):
    state = service.validate_employee(AttendanceSessionState(), "E1", now=fixed_now)
    with pytest.raises(MissingLocation):
        service.clock(state, now=fixed_now)


def test_clock_cycle_updates_button(service, clock, fixed_now):
    state = service.validate_employee(AttendanceSessionState(), "E1", now=fixed_now)
    state = service.update_location(state, 24.9, 67.05)

    record, state = service.clock(state, now=fixed_now)
    assert record.status == ClockStatus.CLOCK_IN
    assert state.day_status == DayStatus.CAN_CLOCK_OUT
    assert state.next_action == ClockStatus.CLOCK_OUT

    clock.advance(hours=8)
    record, state = service.clock(state, now=clock.now)
    assert record.status == ClockStatus.CLOCK_OUT
    assert state.day_status == DayStatus.ALREADY_COMPLETE
    assert state.next_action is None

    with pytest.raises(TransitionRejected) as exc:
        service.clock(state, now=clock.now)
    assert exc.value.reason == RejectionReason.ALREADY_COMPLETE


def test_stale_session_status_is_rechecked(service, fixed_now):
    state = service.validate_employee(AttendanceSessionState(), "E1", now=fixed_now)
    state = service.update_location(state, 24.9, 67.05)
    service.clock(state, now=fixed_now)

    # The session still believes the employee can clock in.
    with pytest.raises(TransitionRejected) as exc:
        service.clock(state, now=fixed_now)
    assert exc.value.reason == RejectionReason.ALREADY_CLOCKED_IN


def test_refresh_status(service, gate, profile, coords, fixed_now):
    with pytest.raises(ValidationError):
        service.refresh_status(AttendanceSessionState())

    state = service.validate_employee(AttendanceSessionState(), "E1", now=fixed_now)
    gate.record_transition("E1", profile, coords, ClockStatus.CLOCK_IN, fixed_now)

    assert service.refresh_status(state, now=fixed_now).day_status == DayStatus.CAN_CLOCK_OUT


def test_reset_clears_everything(service):
    assert service.reset() == AttendanceSessionState()
