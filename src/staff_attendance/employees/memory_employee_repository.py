from __future__ import annotations

import threading
from typing import Optional, Sequence

from .model import EmployeeProfile
from .repository import EmployeeRepository


class InMemoryEmployeeRepository(EmployeeRepository):
    def __init__(self, profiles: Sequence[EmployeeProfile] = ()):
        self._lock = threading.Lock()
        self._by_id: dict[str, EmployeeProfile] = {p.employee_id: p for p in profiles}

    def get_employee(self, employee_id: str) -> Optional[EmployeeProfile]:
        with self._lock:
            return self._by_id.get(employee_id)

    def put_employee(self, profile: EmployeeProfile) -> None:
        with self._lock:
            self._by_id[profile.employee_id] = profile

    def list_employees(self) -> Sequence[EmployeeProfile]:
        with self._lock:
            return sorted(self._by_id.values(), key=lambda p: p.employee_id)
