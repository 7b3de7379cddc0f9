from __future__ import annotations

from enum import Enum


class ClockStatus(str, Enum):
    """Kind of clock event stored on an attendance record."""

    CLOCK_IN = "Clock In"
    CLOCK_OUT = "Clock Out"


class DayStatus(str, Enum):
    """What an employee may do for the current day window."""

    CAN_CLOCK_IN = "CAN_CLOCK_IN"
    CAN_CLOCK_OUT = "CAN_CLOCK_OUT"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"
    # Only Clock Out records for the day; blocked like ALREADY_COMPLETE.
    INCONSISTENT = "INCONSISTENT"

    @property
    def is_blocked(self) -> bool:
        return self in {DayStatus.ALREADY_COMPLETE, DayStatus.INCONSISTENT}


class RejectionReason(str, Enum):
    MISSING_LOCATION = "MISSING_LOCATION"
    ALREADY_CLOCKED_IN = "ALREADY_CLOCKED_IN"
    ALREADY_COMPLETE = "ALREADY_COMPLETE"
    NOT_CLOCKED_IN = "NOT_CLOCKED_IN"
    DATA_INTEGRITY = "DATA_INTEGRITY"


class ReportFormat(str, Enum):
    XLSX = "xlsx"
    CSV = "csv"
    PDF = "pdf"
