from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.web import admin_required, current_code, json_body, login_required, ok
from ..core.constants import DEFAULT_MONTHLY_LATE_ALLOWANCE
from ..core.enums import BulkUpdateMode
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("code", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=7)
        session["code"] = s_user.code
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return ok({"user": {"code": s_user.code, "fullName": s_user.full_name, "role": s_user.role.value}})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/users/me", methods=["GET"], endpoint="users_me")
    @login_required
    def me():
        profile = container.employee_service.get(current_code())
        return ok({"user": profile.to_dict()})

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    @admin_required
    def list_users():
        return ok({"users": [p.to_dict() for p in container.employee_service.list_all()]})

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    @admin_required
    def create_user():
        profile = container.employee_service.create(json_body())
        return ok({"user": profile.to_dict()}, 201)

    @app.route("/api/users/<code>", methods=["GET"], endpoint="users_get")
    @admin_required
    def get_user(code: str):
        return ok({"user": container.employee_service.get(code).to_dict()})

    @app.route("/api/users/<code>", methods=["PUT"], endpoint="users_update")
    @admin_required
    def update_user(code: str):
        profile = container.employee_service.update(code, json_body())
        return ok({"user": profile.to_dict()})

    @app.route("/api/users/<code>/status", methods=["PUT"], endpoint="users_status")
    @admin_required
    def set_status(code: str):
        profile = container.employee_service.set_status(code, str(json_body().get("status", "")))
        return ok({"user": profile.to_dict()})

    @app.route("/api/users/<code>", methods=["DELETE"], endpoint="users_delete")
    @admin_required
    def delete_user(code: str):
        container.employee_service.delete(code, current_code=current_code())
        return ok({"message": f"Employee {code} deleted"})

    @app.route("/api/users/bulk-update", methods=["POST"], endpoint="users_bulk_update")
    @admin_required
    def bulk_update():
        data = json_body()
        try:
            mode = BulkUpdateMode(data.get("mode") or BulkUpdateMode.SET.value)
        except ValueError:
            raise ValidationError("mode must be set or increment")
        fields = data.get("fields")
        if not isinstance(fields, dict):
            fields = {k: v for k, v in data.items() if k != "mode"}
        updated = container.employee_service.bulk_update(fields, mode=mode)
        return ok({"updated": updated})

    @app.route("/api/users/reset-late-allowance", methods=["POST"], endpoint="users_reset_late_allowance")
    @admin_required
    def reset_late_allowance():
        data = json_body()
        try:
            allowance = int(data.get("allowance", DEFAULT_MONTHLY_LATE_ALLOWANCE))
        except (TypeError, ValueError):
            raise ValidationError("allowance must be a whole number")
        if allowance < 0:
            raise ValidationError("allowance must not be negative")
        return ok({"updated": container.employee_service.reset_late_allowances(allowance)})
