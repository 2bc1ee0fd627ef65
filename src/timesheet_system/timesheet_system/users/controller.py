from __future__ import annotations

from typing import Any, Mapping

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_user_id, json_body, login_required
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError

# JSON field -> EmployeeService field. Unknown keys pass through and are rejected there.
_EMPLOYEE_FIELD_NAMES = {
    "phoneNumber": "phone_number",
    "joinDate": "join_date",
    "password": "new_password",
    "newPassword": "new_password",
}


def employee_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {_EMPLOYEE_FIELD_NAMES.get(k, k): v for k, v in data.items()}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        session["role"] = s_user.role.value

        return jsonify({"success": True, "user": _session_payload()})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        if user_id and session.get("role") == Role.ADMIN.value:
            container.admin_credential_service.discard_pending(str(user_id))
        session.clear()
        return jsonify({"success": True, "message": "Logged out."})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"success": True, "user": _session_payload()})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    def list_employees():
        employees = container.employee_service.list_employees()
        return jsonify({"success": True, "employees": [u.to_public_dict() for u in employees]})

    @app.route("/api/admin/employees/filter", methods=["GET"], endpoint="employee_filter")
    @admin_required
    def employee_filter():
        options = container.employee_service.list_for_filter()
        return jsonify({"success": True, "employees": [o.to_dict() for o in options]})

    @app.route("/api/admin/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    def add_employee():
        created = container.employee_service.add_employee(employee_fields(json_body()))
        body: dict[str, Any] = {"success": True, "employee": created.user.to_public_dict()}
        if created.initial_password:
            body["initialPassword"] = created.initial_password
        return jsonify(body), 201

    @app.route("/api/admin/employees/<user_id>", methods=["GET"], endpoint="get_employee")
    @admin_required
    def get_employee(user_id: str):
        user = container.employee_service.get_employee(user_id)
        if not user:
            raise NotFoundError("Employee not found.")
        return jsonify({"success": True, "employee": user.to_public_dict()})

    @app.route("/api/admin/employees/<user_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    def update_employee(user_id: str):
        updated = container.employee_service.update_employee(user_id, employee_fields(json_body()))
        if not updated:
            raise NotFoundError("Employee not found.")
        return jsonify({"success": True, "employee": updated.to_public_dict()})

    @app.route("/api/admin/employees/<user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    def delete_employee(user_id: str):
        if user_id == current_user_id():
            raise ValidationError("You cannot delete your own account.")
        if not container.employee_service.delete_employee(user_id):
            raise NotFoundError("Employee not found.")
        return jsonify({"success": True, "message": "Employee deleted."})


def _session_payload() -> dict[str, Any]:
    return {
        "id": session.get("user_id"),
        "name": session.get("name"),
        "email": session.get("email"),
        "role": session.get("role"),
    }
