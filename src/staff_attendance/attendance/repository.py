from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Attendance half of the attendance store."""

    def query_attendance(
        self,
        *,
        employee_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records matching employee_id and start <= timestamp < end, oldest first.

        Every filter is optional; no filters returns the whole log.
        """

        raise NotImplementedError

    def put_attendance(self, key: str, record: AttendanceRecord) -> None:
        """Idempotent upsert of one clock event.

        Keys are unique per event; writing an existing key replaces that event.
        """

        raise NotImplementedError
