from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional, Sequence

from .model import AttendanceRecord
from .repository import AttendanceRepository


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._lock = threading.Lock()
        self._by_key: dict[str, AttendanceRecord] = {r.record_key: r for r in records}

    def query_attendance(
        self,
        *,
        employee_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = list(self._by_key.values())

        if employee_id is not None:
            items = [r for r in items if r.employee_id == employee_id]
        if start is not None:
            items = [r for r in items if r.timestamp >= start]
        if end is not None:
            items = [r for r in items if r.timestamp < end]
        items.sort(key=lambda r: r.timestamp)
        return items

    def put_attendance(self, key: str, record: AttendanceRecord) -> None:
        with self._lock:
            self._by_key[key] = record

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_key)
