from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.web import error_response, fail, json_body, ok, state_holder
from ..core.constants import DATETIME_FORMAT
from ..core.enums import DayStatus
from ..core.exceptions import EmployeeNotFound
from ..container import Container

STATUS_MESSAGES = {
    DayStatus.CAN_CLOCK_IN: "You can clock in.",
    DayStatus.CAN_CLOCK_OUT: "You are clocked in.",
    DayStatus.ALREADY_COMPLETE: "You have already clocked in and out for the day.",
    DayStatus.INCONSISTENT: "Today's attendance records are inconsistent. Please contact an administrator.",
}


def _state_payload(state) -> dict:
    next_action = state.next_action
    return {
        "state": state.to_dict(),
        "next_action": next_action.value if next_action else None,
        "status_message": STATUS_MESSAGES.get(state.day_status) if state.day_status else None,
    }


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/clock", methods=["GET"], endpoint="api_clock")
    def api_clock():
        """Date/time shown on the form; the page polls it every second."""
        return ok({"now": now_local(container.tz).strftime(DATETIME_FORMAT)})

    @app.route("/api/session", methods=["GET"], endpoint="api_session")
    def api_session():
        return ok(_state_payload(state_holder().state))

    @app.route("/api/validate", methods=["POST"], endpoint="api_validate")
    def api_validate():
        holder = state_holder()
        employee_id = str(json_body().get("employee_id", ""))
        try:
            state = holder.replace(service.validate_employee(holder.state, employee_id))
            return ok({"message": "Employee ID validated successfully!", **_state_payload(state)})
        except EmployeeNotFound as e:
            holder.replace(holder.state.without_profile(e.employee_id))
            return error_response(e, failure_message="Failed to validate employee ID.")
        except Exception as e:
            return error_response(e, failure_message="Failed to validate employee ID.")

    @app.route("/api/location", methods=["POST"], endpoint="api_location")
    def api_location():
        holder = state_holder()
        data = json_body()
        try:
            state = holder.replace(service.update_location(holder.state, data.get("latitude"), data.get("longitude")))
            return ok(_state_payload(state))
        except Exception as e:
            return error_response(e, failure_message="Failed to get coordinates.")

    @app.route("/api/status", methods=["GET"], endpoint="api_status")
    def api_status():
        holder = state_holder()
        try:
            state = holder.replace(service.refresh_status(holder.state))
            return ok(_state_payload(state))
        except Exception as e:
            return error_response(e, failure_message="Failed to load attendance status.")

    @app.route("/api/clock", methods=["POST"], endpoint="api_clock_in_out")
    def api_clock_in_out():
        holder = state_holder()
        if not holder.state.validated:
            return fail("Please validate your employee ID first.", 400)
        try:
            record, state = service.clock(holder.state)
            holder.replace(state)
            return ok(
                {
                    "message": f"{record.status.value} successfully recorded!",
                    "record": record.to_dict(),
                    **_state_payload(state),
                },
                201,
            )
        except Exception as e:
            return error_response(e, failure_message="Error recording attendance.")

    @app.route("/api/reset", methods=["POST"], endpoint="api_reset")
    def api_reset():
        holder = state_holder()
        state = holder.replace(service.reset())
        return ok(_state_payload(state))
