from __future__ import annotations

from .enums import RejectionReason


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class EmployeeNotFound(ValidationError):
    """Raised when an employee id has no profile."""

    def __init__(self, employee_id: str, message: str = "Employee ID not found!"):
        super().__init__(message)
        self.employee_id = employee_id


class TransitionRejected(ValidationError):
    """Raised when a clock-in/clock-out request is not allowed right now."""

    def __init__(self, reason: RejectionReason, message: str):
        super().__init__(message)
        self.reason = reason


class MissingLocation(TransitionRejected):
    def __init__(self, message: str = "Location coordinates are missing."):
        super().__init__(RejectionReason.MISSING_LOCATION, message)


class DataIntegrityError(TransitionRejected):
    """Today's records break the alternating Clock In / Clock Out rule."""

    def __init__(
        self,
        message: str = "Today's attendance records are inconsistent. Please contact an administrator.",
    ):
        super().__init__(RejectionReason.DATA_INTEGRITY, message)


class AuthenticationError(DomainError):
    """Raised when admin credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when the caller lacks the admin capability."""


class StoreUnavailable(DomainError):
    """Raised when the attendance/employee store cannot be read or written."""
