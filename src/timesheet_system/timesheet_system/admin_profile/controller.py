from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import admin_required, current_user_id, json_body
from ..container import Container
from ..core.enums import CredentialChangeFailure
from .model import CredentialChangeResult

_STATUS_BY_FAILURE = {
    CredentialChangeFailure.VALIDATION: 400,
    CredentialChangeFailure.NOT_FOUND: 404,
    CredentialChangeFailure.TOKEN_MISMATCH: 400,
    CredentialChangeFailure.TOKEN_EXPIRED: 410,
    CredentialChangeFailure.ADMIN_NOT_FOUND: 404,
}


def _respond(result: CredentialChangeResult):
    if result.success:
        return jsonify(result.to_dict())
    return jsonify(result.to_dict()), _STATUS_BY_FAILURE.get(result.failure, 400)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/profile/initiate", methods=["POST"], endpoint="admin_profile_initiate")
    @admin_required
    def admin_profile_initiate():
        data = json_body()
        result = container.admin_credential_service.initiate(
            current_user_id(),
            new_username=data.get("newUsername"),
            new_password=data.get("newPassword"),
        )
        return _respond(result)

    @app.route("/api/admin/profile/confirm", methods=["POST"], endpoint="admin_profile_confirm")
    @admin_required
    def admin_profile_confirm():
        data = json_body()
        result = container.admin_credential_service.confirm(current_user_id(), str(data.get("token") or ""))
        if result.success and result.user:
            session["email"] = result.user.email
        return _respond(result)
