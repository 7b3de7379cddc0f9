from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, error_response, state_holder
from ..core.exceptions import ValidationError
from ..container import Container
from .exporters import export_report, parse_format


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    def _send(report):
        exported = export_report(report, parse_format(request.args.get("format")), heading=container.report_title)
        return send_file(
            io.BytesIO(exported.content),
            mimetype=exported.mimetype,
            as_attachment=True,
            download_name=exported.filename,
        )

    def _authorized() -> bool:
        return state_holder().state.admin_authorized

    @app.route("/api/admin/reports/full", methods=["GET"], endpoint="admin_report_full")
    @admin_required
    def admin_report_full():
        try:
            return _send(reports.full_report(authorized=_authorized()))
        except Exception as e:
            return error_response(e, failure_message="Failed to generate report.")

    @app.route("/api/admin/reports/date", methods=["GET"], endpoint="admin_report_date")
    @admin_required
    def admin_report_date():
        try:
            value = (request.args.get("date") or "").strip()
            if not value:
                raise ValidationError("Please select a date.")
            try:
                report_date = parse_iso_date(value)
            except ValueError:
                raise ValidationError("Date must be YYYY-MM-DD.")
            return _send(reports.date_wise_report(authorized=_authorized(), report_date=report_date))
        except Exception as e:
            return error_response(e, failure_message="Failed to generate report.")

    @app.route("/api/admin/reports/employee", methods=["GET"], endpoint="admin_report_employee")
    @admin_required
    def admin_report_employee():
        try:
            employee_id = request.args.get("employee_id", "")
            return _send(reports.employee_wise_report(authorized=_authorized(), employee_id=employee_id))
        except Exception as e:
            return error_response(e, failure_message="Failed to generate report.")
