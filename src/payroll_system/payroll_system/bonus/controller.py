from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, current_code, date_arg, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/bonus-reports/me", methods=["GET"], endpoint="bonus_reports_me")
    @login_required
    def my_bonus_reports():
        args = request.args
        reports = container.bonus_service.get_reports(
            date_from=date_arg(args, "dateFrom"),
            date_to=date_arg(args, "dateTo"),
            code=current_code(),
        )
        return ok({"reports": [r.to_dict() for r in reports]})

    @app.route("/api/bonus-reports", methods=["GET"], endpoint="bonus_reports_list")
    @admin_required
    def list_bonus_reports():
        args = request.args
        reports = container.bonus_service.get_reports(
            date_from=date_arg(args, "dateFrom"),
            date_to=date_arg(args, "dateTo"),
            code=args.get("code") or None,
        )
        return ok({"reports": [r.to_dict() for r in reports]})

    @app.route("/api/bonus-reports", methods=["POST"], endpoint="bonus_reports_save")
    @admin_required
    def save_bonus_report():
        data = json_body()
        report = container.bonus_service.save_report(
            code=str(data.get("code") or ""),
            date_from=date_arg(data, "dateFrom"),
            date_to=date_arg(data, "dateTo"),
            values=data,
            created_by=current_code(),
        )
        return ok({"report": report.to_dict()}, 201)

    @app.route("/api/bonus-reports/<code>", methods=["PUT"], endpoint="bonus_reports_update")
    @admin_required
    def update_bonus_report(code: str):
        data = json_body()
        report = container.bonus_service.update_report(
            code=code,
            date_from=date_arg(data, "dateFrom"),
            date_to=date_arg(data, "dateTo"),
            values=data,
            updated_by=current_code(),
        )
        return ok({"report": report.to_dict()})
