from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..common.validators import optional_coordinate, require_non_empty
from ..core.enums import ClockStatus, DayStatus
from ..core.exceptions import ValidationError
from ..employees.service import EmployeeService
from .gate import AttendanceGate
from .model import AttendanceRecord
from .session_state import AttendanceSessionState


class AttendanceService:
    """Use cases behind the attendance form.

    Each call takes the current session state and returns the next one.
    """

    def __init__(self, gate: AttendanceGate, employees: EmployeeService):
        self._gate = gate
        self._employees = employees

    def validate_employee(
        self,
        state: AttendanceSessionState,
        employee_id: str,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceSessionState:
        employee_id = require_non_empty(employee_id, "Employee ID", "Please enter a valid employee ID.")
        profile = self._employees.get_profile(employee_id)
        day_status = self._gate.compute_status(profile.employee_id, now)
        return state.with_profile(profile, day_status)

    def update_location(self, state: AttendanceSessionState, latitude, longitude) -> AttendanceSessionState:
        lat = optional_coordinate(latitude, "Latitude", limit=90)
        lng = optional_coordinate(longitude, "Longitude", limit=180)
        return state.with_location(lat, lng)

    def refresh_status(self, state: AttendanceSessionState, *, now: Optional[datetime] = None) -> AttendanceSessionState:
        if not state.validated:
            raise ValidationError("Please validate your employee ID first.")
        return state.with_day_status(self._gate.compute_status(state.employee_id, now))

    def clock(
        self,
        state: AttendanceSessionState,
        *,
        now: Optional[datetime] = None,
    ) -> tuple[AttendanceRecord, AttendanceSessionState]:
        profile = state.profile
        if profile is None:
            raise ValidationError("Please validate your employee ID first.")

        requested = ClockStatus.CLOCK_OUT if state.day_status == DayStatus.CAN_CLOCK_OUT else ClockStatus.CLOCK_IN
        record = self._gate.record_transition(profile.employee_id, profile, state.coordinates, requested, now)
        return record, state.with_day_status(self._gate.compute_status(profile.employee_id, now))

    def reset(self) -> AttendanceSessionState:
        return AttendanceSessionState()
