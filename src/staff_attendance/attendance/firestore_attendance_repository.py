from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore_v1.base_query import FieldFilter

from ..common.datetime_utils import as_local
from ..core.constants import ATTENDANCE_COLLECTION
from ..core.enums import ClockStatus
from ..core.exceptions import StoreUnavailable
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class FirestoreAttendanceRepository(AttendanceRepository):
    """Clock events as documents in the `attendance` collection.

    Field names match the documents the web client has always written, so old
    and new records can be reported together.
    """

    def __init__(self, client, *, collection: str = ATTENDANCE_COLLECTION, tz: Optional[tzinfo] = None):
        self._collection = client.collection(collection)
        self._tz = tz

    def _to_record(self, doc_id: str, data: dict) -> AttendanceRecord:
        return AttendanceRecord(
            record_key=doc_id,
            employee_id=str(data.get("employeeId", "")),
            company_name=data.get("companyName") or "",
            employee_name=data.get("engineerName") or data.get("employeeName") or "",
            status=ClockStatus(data["status"]),
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timestamp=as_local(data["timestamp"], self._tz),
        )

    def _to_timestamp(self, dt: datetime) -> datetime:
        # Firestore compares instants; naive values are app-local wall time.
        if dt.tzinfo is None:
            return dt.astimezone() if self._tz is None else dt.replace(tzinfo=self._tz)
        return dt

    def query_attendance(
        self,
        *,
        employee_id: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        query = self._collection
        if employee_id is not None:
            query = query.where(filter=FieldFilter("employeeId", "==", employee_id))
        if start is not None:
            query = query.where(filter=FieldFilter("timestamp", ">=", self._to_timestamp(start)))
        if end is not None:
            query = query.where(filter=FieldFilter("timestamp", "<", self._to_timestamp(end)))

        try:
            docs = list(query.stream())
        except GoogleAPIError as exc:
            logger.exception("Firestore attendance query failed (employee=%s)", employee_id)
            raise StoreUnavailable("Attendance store is unavailable") from exc

        records = [self._to_record(d.id, d.to_dict() or {}) for d in docs]
        records.sort(key=lambda r: r.timestamp)
        return records

    def put_attendance(self, key: str, record: AttendanceRecord) -> None:
        try:
            self._collection.document(key).set(
                {
                    "employeeId": record.employee_id,
                    "companyName": record.company_name,
                    "engineerName": record.employee_name,
                    "status": record.status.value,
                    "latitude": record.latitude,
                    "longitude": record.longitude,
                    "timestamp": self._to_timestamp(record.timestamp),
                }
            )
        except GoogleAPIError as exc:
            logger.exception("Firestore write failed for %s", key)
            raise StoreUnavailable("Attendance store is unavailable") from exc
