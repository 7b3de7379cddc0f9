from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import ClockStatus


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float

    @classmethod
    def of(cls, latitude: Optional[float], longitude: Optional[float]) -> Optional["Coordinates"]:
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one clock event. Append-only, never updated."""

    record_key: str
    employee_id: str
    company_name: str
    employee_name: str
    status: ClockStatus
    latitude: float
    longitude: float
    timestamp: datetime

    @staticmethod
    def make_key(employee_id: str, timestamp: datetime) -> str:
        return f"{employee_id}_{timestamp.isoformat()}"

    def to_dict(self) -> dict:
        return {
            "record_key": self.record_key,
            "employee_id": self.employee_id,
            "company_name": self.company_name,
            "employee_name": self.employee_name,
            "status": self.status.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timestamp": self.timestamp.isoformat(),
        }
