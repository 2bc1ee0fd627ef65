from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.photos import validate_photo_data_uri
from ..common.validators import optional_month, require_non_empty
from ..common.web import (
    admin_required,
    current_locale,
    current_user_id,
    employee_required,
    json_body,
)
from ..container import Container
from ..core.enums import HistoryPeriod
from ..core.exceptions import NotFoundError, ValidationError
from .history import summarize_history


def register(app: Flask, container: Container) -> None:
    def _activity_and_photo(data: dict) -> tuple[str, str | None]:
        activity = require_non_empty(data.get("activity"), "Activity")
        photo = validate_photo_data_uri(data.get("photo"), max_bytes=container.max_photo_bytes)
        return activity, photo

    @app.route("/api/work/start", methods=["POST"], endpoint="start_work")
    @employee_required
    def start_work():
        activity, photo = _activity_and_photo(json_body())
        entry = container.work_session_service.start_work(current_user_id(), activity, photo)
        return jsonify({"success": True, "entry": entry.to_dict()}), 201

    @app.route("/api/work/<entry_id>/end", methods=["POST"], endpoint="end_work")
    @employee_required
    def end_work(entry_id: str):
        activity, photo = _activity_and_photo(json_body())
        entry = container.work_session_service.end_work(entry_id, current_user_id(), activity, photo)
        if not entry:
            raise NotFoundError("No open work entry with this id.")
        return jsonify({"success": True, "entry": entry.to_dict()})

    @app.route("/api/work/open", methods=["GET"], endpoint="open_entry")
    @employee_required
    def open_entry():
        on_date = request.args.get("date") or None
        entry = container.work_session_service.find_open_entry(current_user_id(), on_date=on_date)
        return jsonify({"success": True, "entry": entry.to_dict() if entry else None})

    @app.route("/api/work/history", methods=["GET"], endpoint="work_history")
    @employee_required
    def work_history():
        try:
            period = HistoryPeriod(request.args.get("period") or HistoryPeriod.MONTH.value)
        except ValueError:
            raise ValidationError("Period must be one of: all, month, year")

        value = (request.args.get("value") or "").strip() or None
        if period == HistoryPeriod.MONTH:
            value = optional_month(value)
        elif period == HistoryPeriod.YEAR and value and not (len(value) == 4 and value.isdigit()):
            raise ValidationError("Year must be YYYY")

        locale = current_locale()
        entries = container.work_session_service.history_for_user(current_user_id())
        summary = summarize_history(
            entries,
            period=period,
            value=value,
            locale=locale,
            today=date.today(),
        )
        return jsonify({"success": True, "history": summary.to_dict(locale)})

    @app.route("/api/admin/entries", methods=["GET"], endpoint="all_entries")
    @admin_required
    def all_entries():
        entries = container.work_session_service.all_entries()
        return jsonify({"success": True, "entries": [e.to_dict() for e in entries]})

    @app.route("/api/admin/entries/<entry_id>", methods=["GET"], endpoint="get_entry")
    @admin_required
    def get_entry(entry_id: str):
        entry = container.work_session_service.get_entry(entry_id)
        if not entry:
            raise NotFoundError("Work entry not found.")
        return jsonify({"success": True, "entry": entry.to_dict()})
