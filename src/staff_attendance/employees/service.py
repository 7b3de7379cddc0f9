from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import AuthorizationError, EmployeeNotFound, ValidationError
from .model import EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: look up employees (attendance form) and manage them (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get_profile(self, employee_id: str) -> EmployeeProfile:
        employee_id = require_non_empty(employee_id, "Employee ID", "Please enter a valid employee ID.")
        profile = self._employees.get_employee(employee_id)
        if not profile:
            raise EmployeeNotFound(employee_id)
        return profile

    def add_employee(
        self,
        *,
        authorized: bool,
        employee_id: str,
        company_name: str,
        employee_name: str,
    ) -> EmployeeProfile:
        if not authorized:
            raise AuthorizationError("Admin access required")

        values = [(employee_id or "").strip(), (company_name or "").strip(), (employee_name or "").strip()]
        if not all(values):
            raise ValidationError("Please fill out all fields.")

        profile = EmployeeProfile(employee_id=values[0], company_name=values[1], employee_name=values[2])
        self._employees.put_employee(profile)
        logger.info("Employee %s saved (%s)", profile.employee_id, profile.company_name)
        return profile

    def list_employees(self, *, authorized: bool) -> Sequence[EmployeeProfile]:
        if not authorized:
            raise AuthorizationError("Admin access required")
        return self._employees.list_employees()
