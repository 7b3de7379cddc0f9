from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, Optional

from .attendance.gate import AttendanceGate
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import load_timezone, now_local
from .employees.admin_auth import AdminAuthenticator, FirebaseAdminAuthenticator, PasswordAdminAuthenticator
from .employees.memory_employee_repository import InMemoryEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reports.service import ReportService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    backend: str
    tz: Optional[tzinfo]

    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    admin_auth: AdminAuthenticator
    gate: AttendanceGate
    employee_service: EmployeeService
    attendance_service: AttendanceService
    report_service: ReportService
    report_title: str = "Attendance System"


def _build_repositories(settings, backend: str, tz: Optional[tzinfo]) -> tuple[EmployeeRepository, AttendanceRepository]:
    if backend == "memory":
        return InMemoryEmployeeRepository(), InMemoryAttendanceRepository()

    if backend == "mysql":
        from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
        from .database.connection import DatabaseConnection, DBConfig
        from .employees.mysql_employee_repository import MySQLEmployeeRepository

        config = DBConfig.from_dict(dict(getattr(settings, "DB_CONFIG")))
        conn = DatabaseConnection.get_instance(config)
        logger.info("Attendance store: MySQL %s", config.describe())
        return MySQLEmployeeRepository(conn), MySQLAttendanceRepository(conn, tz=tz)

    if backend == "firestore":
        from .attendance.firestore_attendance_repository import FirestoreAttendanceRepository
        from .database.firestore import firestore_client
        from .employees.firestore_employee_repository import FirestoreEmployeeRepository

        client = firestore_client(settings)
        logger.info("Attendance store: Firestore")
        return FirestoreEmployeeRepository(client), FirestoreAttendanceRepository(client, tz=tz)

    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_admin_authenticator(settings) -> AdminAuthenticator:
    mode = str(getattr(settings, "ADMIN_AUTH", "password")).lower()
    if mode == "firebase":
        if str(getattr(settings, "STORE_BACKEND", "")).lower() != "firestore":
            # verify_id_token needs an initialized Firebase app
            from .database.firestore import initialize_firebase

            initialize_firebase(
                service_account_key=getattr(settings, "FIREBASE_SERVICE_ACCOUNT_KEY", ""),
                service_account_key_path=getattr(settings, "FIREBASE_SERVICE_ACCOUNT_KEY_PATH", ""),
            )
        return FirebaseAdminAuthenticator(allowed_emails=getattr(settings, "ADMIN_EMAILS", []))
    if mode == "password":
        return PasswordAdminAuthenticator.from_settings(
            password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", ""),
            password=getattr(settings, "ADMIN_PASSWORD", ""),
        )
    raise ValueError(f"Unknown ADMIN_AUTH: {mode!r}")


def build_container(
    settings,
    *,
    employees_repo: Optional[EmployeeRepository] = None,
    attendance_repo: Optional[AttendanceRepository] = None,
    admin_auth: Optional[AdminAuthenticator] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    backend = str(getattr(settings, "STORE_BACKEND", "mysql")).lower()
    tz = load_timezone(getattr(settings, "APP_TIMEZONE", ""))
    clock = clock or (lambda: now_local(tz))

    if employees_repo is None or attendance_repo is None:
        default_employees, default_attendance = _build_repositories(settings, backend, tz)
        if employees_repo is None:
            employees_repo = default_employees
        if attendance_repo is None:
            attendance_repo = default_attendance

    gate = AttendanceGate(attendance_repo, clock=clock)
    employee_service = EmployeeService(employees_repo)

    return Container(
        backend=backend,
        tz=tz,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        admin_auth=admin_auth or build_admin_authenticator(settings),
        gate=gate,
        employee_service=employee_service,
        attendance_service=AttendanceService(gate, employee_service),
        report_service=ReportService(attendance_repo, tz=tz, clock=clock),
        report_title=str(getattr(settings, "REPORT_TITLE", "Attendance System")),
    )
