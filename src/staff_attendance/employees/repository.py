from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    """Employee half of the attendance store.

    Services depend on this interface, not on a concrete database.
    """

    def get_employee(self, employee_id: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def put_employee(self, profile: EmployeeProfile) -> None:
        """Create or replace the profile keyed by employee_id."""

        raise NotImplementedError

    def list_employees(self) -> Sequence[EmployeeProfile]:
        raise NotImplementedError
