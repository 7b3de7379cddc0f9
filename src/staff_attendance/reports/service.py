from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import date_window, now_local
from ..core.constants import (
    DATE_FORMAT,
    DATE_REPORT_SHEET,
    EMPLOYEE_REPORT_SHEET,
    FULL_REPORT_SHEET,
    REPORT_COLUMNS,
    TIME_FORMAT,
)
from ..core.exceptions import AuthorizationError, ValidationError


@dataclass(frozen=True)
class ReportData:
    title: str
    sheet_name: str
    filename_stem: str
    rows: list[dict]

    @property
    def columns(self) -> list[str]:
        return list(REPORT_COLUMNS)


def to_report_row(r: AttendanceRecord) -> dict:
    return {
        "Employee ID": r.employee_id,
        "Company Name": r.company_name,
        "Employee Name": r.employee_name,
        "Date": r.timestamp.strftime(DATE_FORMAT),
        "Time": r.timestamp.strftime(TIME_FORMAT),
        "Latitude": r.latitude,
        "Longitude": r.longitude,
        "Status": r.status.value,
    }


class ReportService:
    """Admin reports over the attendance log."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._attendance = attendance
        self._tz = tz
        self._clock = clock or (lambda: now_local(tz))

    @staticmethod
    def _require_admin(authorized: bool) -> None:
        if not authorized:
            raise AuthorizationError("Admin access required")

    @staticmethod
    def _rows(records: Sequence[AttendanceRecord]) -> list[dict]:
        return [to_report_row(r) for r in sorted(records, key=lambda r: r.timestamp)]

    def full_report(self, *, authorized: bool) -> ReportData:
        self._require_admin(authorized)
        records = self._attendance.query_attendance()
        generated = self._clock()
        return ReportData(
            title="Attendance Report",
            sheet_name=FULL_REPORT_SHEET,
            filename_stem=f"attendance_report_{generated.strftime('%Y-%m-%dT%H-%M-%S')}",
            rows=self._rows(records),
        )

    def date_wise_report(self, *, authorized: bool, report_date: Optional[date]) -> ReportData:
        self._require_admin(authorized)
        if not report_date:
            raise ValidationError("Please select a date.")

        start, end = date_window(report_date, self._tz)
        records = self._attendance.query_attendance(start=start, end=end)
        if not records:
            raise ValidationError("No records found for the selected date.")

        day = report_date.strftime(DATE_FORMAT)
        return ReportData(
            title=f"Attendance Report - {day}",
            sheet_name=DATE_REPORT_SHEET,
            filename_stem=f"date_wise_report_{day}",
            rows=self._rows(records),
        )

    def employee_wise_report(self, *, authorized: bool, employee_id: str) -> ReportData:
        self._require_admin(authorized)
        employee_id = (employee_id or "").strip()
        if not employee_id:
            raise ValidationError("Please enter an employee ID.")

        records = self._attendance.query_attendance(employee_id=employee_id)
        if not records:
            raise ValidationError("No records found for the specified employee.")

        return ReportData(
            title=f"Attendance Report - Employee {employee_id}",
            sheet_name=EMPLOYEE_REPORT_SHEET,
            filename_stem=f"employee_wise_report_{employee_id}",
            rows=self._rows(records),
        )
