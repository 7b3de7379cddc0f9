from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Optional

from ..core.enums import ClockStatus, DayStatus
from ..employees.model import EmployeeProfile
from .model import Coordinates

Listener = Callable[["AttendanceSessionState", "AttendanceSessionState"], None]


@dataclass(frozen=True)
class AttendanceSessionState:
    """Everything the attendance form knows about the current user.

    Never mutated: each step produces a new instance.
    """

    employee_id: str = ""
    company_name: str = ""
    employee_name: str = ""
    validated: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    day_status: Optional[DayStatus] = None
    admin_authorized: bool = False

    @property
    def coordinates(self) -> Optional[Coordinates]:
        return Coordinates.of(self.latitude, self.longitude)

    @property
    def profile(self) -> Optional[EmployeeProfile]:
        if not self.validated:
            return None
        return EmployeeProfile(
            employee_id=self.employee_id,
            company_name=self.company_name,
            employee_name=self.employee_name,
        )

    @property
    def next_action(self) -> Optional[ClockStatus]:
        """Label of the clock button; None when the day is closed."""
        if not self.validated or self.day_status is None or self.day_status.is_blocked:
            return None
        if self.day_status == DayStatus.CAN_CLOCK_OUT:
            return ClockStatus.CLOCK_OUT
        return ClockStatus.CLOCK_IN

    def with_profile(self, profile: EmployeeProfile, day_status: DayStatus) -> "AttendanceSessionState":
        return replace(
            self,
            employee_id=profile.employee_id,
            company_name=profile.company_name,
            employee_name=profile.employee_name,
            validated=True,
            day_status=day_status,
        )

    def without_profile(self, employee_id: str = "") -> "AttendanceSessionState":
        return replace(
            self,
            employee_id=employee_id,
            company_name="",
            employee_name="",
            validated=False,
            day_status=None,
        )

    def with_location(self, latitude: Optional[float], longitude: Optional[float]) -> "AttendanceSessionState":
        return replace(self, latitude=latitude, longitude=longitude)

    def with_day_status(self, day_status: DayStatus) -> "AttendanceSessionState":
        return replace(self, day_status=day_status)

    def with_admin(self, authorized: bool) -> "AttendanceSessionState":
        return replace(self, admin_authorized=bool(authorized))

    def to_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "company_name": self.company_name,
            "employee_name": self.employee_name,
            "validated": self.validated,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "day_status": self.day_status.value if self.day_status else None,
            "admin_authorized": self.admin_authorized,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "AttendanceSessionState":
        if not data:
            return cls()
        day_status = data.get("day_status")
        return cls(
            employee_id=str(data.get("employee_id") or ""),
            company_name=str(data.get("company_name") or ""),
            employee_name=str(data.get("employee_name") or ""),
            validated=bool(data.get("validated")),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            day_status=DayStatus(day_status) if day_status else None,
            admin_authorized=bool(data.get("admin_authorized")),
        )


class SessionStateHolder:
    """Holds the current state and tells subscribers about each replacement."""

    def __init__(self, initial: Optional[AttendanceSessionState] = None):
        self._state = initial or AttendanceSessionState()
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    @property
    def state(self) -> AttendanceSessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, new_state: AttendanceSessionState) -> AttendanceSessionState:
        with self._lock:
            old, self._state = self._state, new_state
        if new_state != old:
            for listener in list(self._listeners):
                listener(old, new_state)
        return new_state
