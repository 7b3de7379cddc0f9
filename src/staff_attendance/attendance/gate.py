"""Clock-in / clock-out eligibility for one employee and one day window."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import day_window, now_local
from ..common.validators import require_non_empty
from ..core.enums import ClockStatus, DayStatus, RejectionReason
from ..core.exceptions import DataIntegrityError, MissingLocation, TransitionRejected, ValidationError
from ..employees.model import EmployeeProfile
from .model import AttendanceRecord, Coordinates
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

ALREADY_CLOCKED_IN_MSG = "You have already clocked in today!"
ALREADY_COMPLETE_MSG = "You have already clocked in and out for the day."
NOT_CLOCKED_IN_MSG = "You have not clocked in today."
NOT_TODAY_MSG = "Clock requests can only be recorded for the current day."


def classify_day(records: Sequence[AttendanceRecord]) -> DayStatus:
    """Classify by presence across the whole day, never by the first record only."""
    has_in = any(r.status == ClockStatus.CLOCK_IN for r in records)
    has_out = any(r.status == ClockStatus.CLOCK_OUT for r in records)

    if not has_in and not has_out:
        return DayStatus.CAN_CLOCK_IN
    if has_in and not has_out:
        return DayStatus.CAN_CLOCK_OUT
    if has_in and has_out:
        return DayStatus.ALREADY_COMPLETE
    return DayStatus.INCONSISTENT


def sequence_issues(records: Sequence[AttendanceRecord]) -> list[str]:
    """Where the day's records stop alternating Clock In, Clock Out, ..."""
    issues: list[str] = []
    expected = ClockStatus.CLOCK_IN
    for r in sorted(records, key=lambda r: r.timestamp):
        if r.status != expected:
            issues.append(f"{r.record_key}: expected {expected.value}, got {r.status.value}")
            expected = r.status
        expected = ClockStatus.CLOCK_OUT if expected == ClockStatus.CLOCK_IN else ClockStatus.CLOCK_IN
    return issues


class AttendanceGate:
    """Decides whether a clock event is allowed now and appends it if so.

    Check-then-write is serialised per employee inside this process; two
    processes writing for the same employee at the same instant can still race.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, employee_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(employee_id)
            if lock is None:
                lock = self._locks[employee_id] = threading.Lock()
            return lock

    def records_for_day(self, employee_id: str, now: Optional[datetime] = None) -> Sequence[AttendanceRecord]:
        employee_id = require_non_empty(employee_id, "Employee ID")
        start, end = day_window(now or self._clock())
        return self._attendance.query_attendance(employee_id=employee_id, start=start, end=end)

    def compute_status(self, employee_id: str, now: Optional[datetime] = None) -> DayStatus:
        return self._status_of(employee_id, self.records_for_day(employee_id, now))

    def _status_of(self, employee_id: str, records: Sequence[AttendanceRecord]) -> DayStatus:
        status = classify_day(records)

        issues = sequence_issues(records)
        if issues:
            logger.warning(
                "Attendance data integrity: employee %s has out-of-order records (%s)",
                employee_id,
                "; ".join(issues),
            )
        return status

    def record_transition(
        self,
        employee_id: str,
        profile: EmployeeProfile,
        coordinates: Optional[Coordinates],
        requested_status: ClockStatus,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        if coordinates is None or coordinates.latitude is None or coordinates.longitude is None:
            raise MissingLocation()

        employee_id = require_non_empty(employee_id, "Employee ID")
        requested_status = ClockStatus(requested_status)

        with self._lock_for(employee_id):
            # The day checked is always the day of the timestamp written.
            timestamp = self._clock()
            if now is not None and day_window(now)[0] != day_window(timestamp)[0]:
                raise ValidationError(NOT_TODAY_MSG)

            records = self.records_for_day(employee_id, timestamp)
            self._check_allowed(employee_id, requested_status, self._status_of(employee_id, records))

            latest = max((r.timestamp for r in records), default=None)
            if latest is not None and timestamp <= latest:
                # Keys embed the timestamp; a repeated or stale clock reading must not overwrite.
                timestamp = latest + timedelta(microseconds=1)

            record = AttendanceRecord(
                record_key=AttendanceRecord.make_key(employee_id, timestamp),
                employee_id=employee_id,
                company_name=profile.company_name,
                employee_name=profile.employee_name,
                status=requested_status,
                latitude=float(coordinates.latitude),
                longitude=float(coordinates.longitude),
                timestamp=timestamp,
            )
            self._attendance.put_attendance(record.record_key, record)

        logger.info("%s recorded for employee %s at %s", requested_status.value, employee_id, timestamp.isoformat())
        return record

    def _check_allowed(self, employee_id: str, requested: ClockStatus, status: DayStatus) -> None:
        if status == DayStatus.INCONSISTENT:
            logger.warning("Blocked %s for employee %s: only Clock Out records today", requested.value, employee_id)
            raise DataIntegrityError()

        if requested == ClockStatus.CLOCK_IN:
            if status == DayStatus.CAN_CLOCK_OUT:
                self._reject(employee_id, RejectionReason.ALREADY_CLOCKED_IN, ALREADY_CLOCKED_IN_MSG)
            if status == DayStatus.ALREADY_COMPLETE:
                self._reject(employee_id, RejectionReason.ALREADY_COMPLETE, ALREADY_COMPLETE_MSG)
        elif status != DayStatus.CAN_CLOCK_OUT:
            self._reject(employee_id, RejectionReason.NOT_CLOCKED_IN, NOT_CLOCKED_IN_MSG)

    @staticmethod
    def _reject(employee_id: str, reason: RejectionReason, message: str) -> None:
        logger.info("Clock request rejected for employee %s: %s", employee_id, reason.value)
        raise TransitionRejected(reason, message)
