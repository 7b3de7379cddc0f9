from __future__ import annotations

import importlib

import pytest

from staff_attendance.attendance.memory_attendance_repository import InMemoryAttendanceRepository
from staff_attendance.container import build_container
from staff_attendance.core.exceptions import StoreUnavailable
from staff_attendance.main import create_app

TESTING = "staff_attendance.config.testing"


class UnavailableAttendance(InMemoryAttendanceRepository):
    def query_attendance(self, **kwargs):
        raise StoreUnavailable("Attendance store is unavailable")


def _client(employees_repo, attendance_repo, clock):
    settings = importlib.import_module(TESTING)
    container = build_container(
        settings,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        clock=clock,
    )
    return create_app(settings_module=TESTING, container=container).test_client()


@pytest.fixture
def client(employees_repo, attendance_repo, clock):
    return _client(employees_repo, attendance_repo, clock)


def _login(client):
    return client.post("/api/admin/login", json={"password": "admin-test"})


def test_clock_endpoint(client):
    res = client.get("/api/clock")
    assert res.status_code == 200
    assert res.get_json()["success"] is True
    assert len(res.get_json()["now"]) == 19


def test_unknown_employee(client):
    res = client.post("/api/validate", json={"employee_id": "E404"})

    assert res.status_code == 404
    assert res.get_json()["message"] == "Employee ID not found!"
    session = client.get("/api/session").get_json()
    assert session["state"]["employee_id"] == "E404"
    assert session["state"]["validated"] is False


def test_attendance_flow(client, clock):
    res = client.post("/api/validate", json={"employee_id": "E1"})
    assert res.status_code == 200
    assert res.get_json()["next_action"] == "Clock In"
    assert res.get_json()["state"]["employee_name"] == "Ahmed Khan"

    res = client.post("/api/clock")
    assert res.status_code == 400
    assert res.get_json()["reason"] == "MISSING_LOCATION"

    assert client.post("/api/location", json={"latitude": 24.9, "longitude": 67.05}).status_code == 200

    res = client.post("/api/clock")
    assert res.status_code == 201
    assert res.get_json()["message"] == "Clock In successfully recorded!"
    assert res.get_json()["next_action"] == "Clock Out"

    clock.advance(hours=8)
    res = client.post("/api/clock")
    assert res.status_code == 201
    assert res.get_json()["message"] == "Clock Out successfully recorded!"
    assert res.get_json()["next_action"] is None

    res = client.post("/api/clock")
    assert res.status_code == 409
    assert res.get_json()["reason"] == "ALREADY_COMPLETE"
    assert res.get_json()["message"] == "You have already clocked in and out for the day."


def test_clock_before_validation(client):
    res = client.post("/api/clock")
    assert res.status_code == 400
    assert res.get_json()["message"] == "Please validate your employee ID first."


def test_invalid_location(client):
    res = client.post("/api/location", json={"latitude": 123, "longitude": 0})
    assert res.status_code == 400


def test_status_refresh_sees_other_sessions(client, employees_repo, attendance_repo, clock):
    client.post("/api/validate", json={"employee_id": "E1"})

    other = _client(employees_repo, attendance_repo, clock)
    other.post("/api/validate", json={"employee_id": "E1"})
    other.post("/api/location", json={"latitude": 1, "longitude": 2})
    assert other.post("/api/clock").status_code == 201

    res = client.get("/api/status")
    assert res.get_json()["state"]["day_status"] == "CAN_CLOCK_OUT"


def test_store_outage_is_reported(employees_repo, clock):
    client = _client(employees_repo, UnavailableAttendance(), clock)

    res = client.post("/api/validate", json={"employee_id": "E1"})
    assert res.status_code == 503
    assert res.get_json()["message"] == "Failed to validate employee ID."


def test_admin_routes_need_login(client):
    assert client.get("/api/admin/employees").status_code == 403
    assert client.get("/api/admin/reports/full").status_code == 403

    res = client.post("/api/admin/login", json={"password": "wrong"})
    assert res.status_code == 401
    assert res.get_json()["message"] == "Incorrect password. Please try again."


def test_admin_manages_employees(client):
    assert _login(client).status_code == 200

    res = client.post(
        "/api/admin/employees",
        json={"employee_id": "E2", "company_name": "Acme", "employee_name": "Sara Ali"},
    )
    assert res.status_code == 201
    assert res.get_json()["message"] == "New employee added successfully!"

    res = client.post("/api/admin/employees", json={"employee_id": "E3"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Please fill out all fields."

    ids = [e["employee_id"] for e in client.get("/api/admin/employees").get_json()["employees"]]
    assert ids == ["E1", "E2"]

    client.post("/api/admin/logout")
    assert client.get("/api/admin/employees").status_code == 403


def test_admin_downloads_reports(client):
    client.post("/api/validate", json={"employee_id": "E1"})
    client.post("/api/location", json={"latitude": 24.9, "longitude": 67.05})
    client.post("/api/clock")
    _login(client)

    res = client.get("/api/admin/reports/full")
    assert res.status_code == 200
    assert res.data[:2] == b"PK"
    assert "attendance_report_2026-03-02T09-00-00.xlsx" in res.headers["Content-Disposition"]

    res = client.get("/api/admin/reports/employee?employee_id=E1&format=csv")
    assert res.status_code == 200
    assert "employee_wise_report_E1.csv" in res.headers["Content-Disposition"]

    res = client.get("/api/admin/reports/date?date=2026-03-02&format=pdf")
    assert res.status_code == 200
    assert res.data.startswith(b"%PDF")

    res = client.get("/api/admin/reports/date?date=2026-01-01")
    assert res.status_code == 400
    assert res.get_json()["message"] == "No records found for the selected date."

    assert client.get("/api/admin/reports/date?date=02/03/2026").status_code == 400
    assert client.get("/api/admin/reports/date").status_code == 400
    assert client.get("/api/admin/reports/full?format=docx").status_code == 400


def test_reset_drops_admin_access(client):
    _login(client)
    assert client.get("/api/admin/employees").status_code == 200

    client.post("/api/reset")
    assert client.get("/api/admin/employees").status_code == 403
