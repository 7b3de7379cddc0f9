from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import EmployeeProfile
from .repository import EmployeeRepository


def _to_profile(row: dict) -> EmployeeProfile:
    return EmployeeProfile(
        employee_id=str(row["employee_id"]),
        company_name=row.get("company_name") or "",
        employee_name=row.get("employee_name") or "",
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_employee(self, employee_id: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, company_name, employee_name
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def put_employee(self, profile: EmployeeProfile) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(employee_id, company_name, employee_name)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE company_name=VALUES(company_name), employee_name=VALUES(employee_name)
                """,
                (profile.employee_id, profile.company_name, profile.employee_name),
            )

    def list_employees(self) -> Sequence[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, company_name, employee_name
                FROM employees
                ORDER BY employee_id ASC
                """
            )
            return [_to_profile(r) for r in fetchall(cur)]
