from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: an employee allowed to clock in.

    Plain data object, no storage access.
    """

    employee_id: str
    company_name: str
    employee_name: str

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "company_name": self.company_name,
            "employee_name": self.employee_name,
        }
