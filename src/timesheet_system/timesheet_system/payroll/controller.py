from __future__ import annotations

import io

from flask import Flask, jsonify, send_file

from ..common.validators import optional_month
from ..common.web import admin_required, current_locale, json_body
from ..container import Container
from ..core.constants import ALL_EMPLOYEES
from ..core.exceptions import ValidationError
from .export import XLSX_MIMETYPE, export_filename, wage_report_to_xlsx
from .model import WageReport


def register(app: Flask, container: Container) -> None:
    def _build_report(data: dict) -> WageReport:
        employee = str(data.get("employee") or ALL_EMPLOYEES).strip() or ALL_EMPLOYEES
        month = optional_month(data.get("month"))
        raw_rates = data.get("rates")
        if raw_rates is not None and not isinstance(raw_rates, dict):
            raise ValidationError("Rates must be an object keyed by employee id")
        rates = container.wage_report_service.rate_book(raw_rates)
        return container.wage_report_service.build_wage_report(employee=employee, month=month, rates=rates)

    @app.route("/api/admin/wage-report", methods=["POST"], endpoint="wage_report")
    @admin_required
    def wage_report():
        data = json_body()
        report = _build_report(data)
        return jsonify({"success": True, "report": report.to_dict(current_locale(data))})

    @app.route("/api/admin/wage-report/export", methods=["POST"], endpoint="wage_report_export")
    @admin_required
    def wage_report_export():
        report = _build_report(json_body())
        return send_file(
            io.BytesIO(wage_report_to_xlsx(report)),
            download_name=export_filename(report),
            as_attachment=True,
            mimetype=XLSX_MIMETYPE,
        )
