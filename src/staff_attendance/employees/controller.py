from __future__ import annotations

import logging

from flask import Flask

from ..common.web import admin_required, error_response, json_body, ok, state_holder
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/login", methods=["POST"], endpoint="admin_login")
    def admin_login():
        holder = state_holder()
        try:
            identity = container.admin_auth.authenticate(json_body())
        except Exception as e:
            return error_response(e, failure_message="Login failed. Please try again.")

        holder.replace(holder.state.with_admin(True))
        logger.info("Admin panel opened by %s", identity)
        return ok({"message": "Admin login successful!"})

    @app.route("/api/admin/logout", methods=["POST"], endpoint="admin_logout")
    def admin_logout():
        holder = state_holder()
        holder.replace(holder.state.with_admin(False))
        return ok({"message": "Logged out of admin panel."})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_list_employees")
    @admin_required
    def admin_list_employees():
        try:
            employees = container.employee_service.list_employees(authorized=True)
            return ok({"employees": [p.to_dict() for p in employees]})
        except Exception as e:
            return error_response(e, failure_message="Failed to load employees.")

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_add_employee")
    @admin_required
    def admin_add_employee():
        data = json_body()
        try:
            profile = container.employee_service.add_employee(
                authorized=state_holder().state.admin_authorized,
                employee_id=str(data.get("employee_id", "")),
                company_name=str(data.get("company_name", "")),
                employee_name=str(data.get("employee_name", "")),
            )
            return ok({"message": "New employee added successfully!", "employee": profile.to_dict()}, 201)
        except Exception as e:
            return error_response(e, failure_message="Error adding new employee.")
