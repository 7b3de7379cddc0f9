"""Add demo employees to the configured store (STORE_BACKEND)."""

from __future__ import annotations

from staff_attendance.container import build_container
from staff_attendance.main import load_settings

DEMO_EMPLOYEES = [
    ("E1", "E& Field Services", "Ahmed Khan"),
    ("E2", "E& Field Services", "Sara Ali"),
    ("E3", "Northwind Telecom", "Bilal Hussain"),
]


def main() -> None:
    settings = load_settings()
    container = build_container(settings)

    for employee_id, company_name, employee_name in DEMO_EMPLOYEES:
        container.employee_service.add_employee(
            authorized=True,
            employee_id=employee_id,
            company_name=company_name,
            employee_name=employee_name,
        )

    print(f"OK: Seeded {len(DEMO_EMPLOYEES)} employees -> backend={container.backend}")


if __name__ == "__main__":
    main()
