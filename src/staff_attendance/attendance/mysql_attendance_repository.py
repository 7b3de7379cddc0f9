from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import as_local, to_naive_local
from ..core.enums import ClockStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    """Timestamps are stored as naive local DATETIME(6) in the app timezone."""

    def __init__(self, conn_factory: DatabaseConnection, *, tz: Optional[tzinfo] = None):
        self._conn_factory = conn_factory
        self._tz = tz

    def _to_record(self, r: dict) -> AttendanceRecord:
        ts = r["timestamp"]
        return AttendanceRecord(
            record_key=r["record_key"],
            employee_id=str(r["employee_id"]),
            company_name=r.get("company_name") or "",
            employee_name=r.get("employee_name") or "",
            status=ClockStatus(r["status"]),
            latitude=float(r["latitude"]),
            longitude=float(r["longitude"]),
            timestamp=as_local(ts, self._tz) if self._tz else ts,
        )

    def query_attendance(
        self,
        *,
        employee_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses: list[str] = []
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if start is not None:
            clauses.append("`timestamp` >= %s")
            params.append(to_naive_local(start, self._tz))
        if end is not None:
            clauses.append("`timestamp` < %s")
            params.append(to_naive_local(end, self._tz))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_key, employee_id, company_name, employee_name,
                       status, latitude, longitude, `timestamp`
                FROM attendance
                {where}
                ORDER BY `timestamp` ASC, record_key ASC
                """,
                tuple(params),
            )
            return [self._to_record(r) for r in fetchall(cur)]

    def put_attendance(self, key: str, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(record_key, employee_id, company_name, employee_name,
                                       status, latitude, longitude, `timestamp`)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    employee_id=VALUES(employee_id),
                    company_name=VALUES(company_name),
                    employee_name=VALUES(employee_name),
                    status=VALUES(status),
                    latitude=VALUES(latitude),
                    longitude=VALUES(longitude),
                    `timestamp`=VALUES(`timestamp`)
                """,
                (
                    key,
                    record.employee_id,
                    record.company_name,
                    record.employee_name,
                    record.status.value,
                    record.latitude,
                    record.longitude,
                    to_naive_local(record.timestamp, self._tz),
                ),
            )
