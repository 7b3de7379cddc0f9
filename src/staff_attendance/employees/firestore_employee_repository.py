from __future__ import annotations

import logging
from typing import Optional, Sequence

from google.api_core.exceptions import GoogleAPIError

from ..core.constants import EMPLOYEES_COLLECTION
from ..core.exceptions import StoreUnavailable
from .model import EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def _to_profile(employee_id: str, data: dict) -> EmployeeProfile:
    # Documents written by the web client use "engineerName" for the display name.
    return EmployeeProfile(
        employee_id=str(data.get("employeeId") or employee_id),
        company_name=data.get("companyName") or "",
        employee_name=data.get("engineerName") or data.get("employeeName") or "",
    )


class FirestoreEmployeeRepository(EmployeeRepository):
    """Profiles stored as documents in the `employees` collection, keyed by employee id."""

    def __init__(self, client, *, collection: str = EMPLOYEES_COLLECTION):
        self._collection = client.collection(collection)

    def get_employee(self, employee_id: str) -> Optional[EmployeeProfile]:
        try:
            snap = self._collection.document(employee_id).get()
        except GoogleAPIError as exc:
            logger.exception("Firestore read failed for employee %s", employee_id)
            raise StoreUnavailable("Employee store is unavailable") from exc
        if not snap.exists:
            return None
        return _to_profile(snap.id, snap.to_dict() or {})

    def put_employee(self, profile: EmployeeProfile) -> None:
        try:
            self._collection.document(profile.employee_id).set(
                {
                    "employeeId": profile.employee_id,
                    "companyName": profile.company_name,
                    "engineerName": profile.employee_name,
                }
            )
        except GoogleAPIError as exc:
            logger.exception("Firestore write failed for employee %s", profile.employee_id)
            raise StoreUnavailable("Employee store is unavailable") from exc

    def list_employees(self) -> Sequence[EmployeeProfile]:
        try:
            docs = list(self._collection.stream())
        except GoogleAPIError as exc:
            logger.exception("Firestore employee listing failed")
            raise StoreUnavailable("Employee store is unavailable") from exc
        profiles = [_to_profile(d.id, d.to_dict() or {}) for d in docs]
        return sorted(profiles, key=lambda p: p.employee_id)
