from __future__ import annotations

from flask import Flask, request

from ..common.web import current_code, date_arg, is_admin, login_required, ok
from ..container import Container
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salary-reports", methods=["GET"], endpoint="salary_reports")
    @login_required
    def salary_reports():
        args = request.args
        admin = is_admin()
        code = args.get("code") or None
        if not admin:
            if code is not None and code != current_code():
                raise AuthorizationError("You can only view your own salary report")
            code = current_code()

        reports = container.payroll_report_service.build_salary_reports(
            start=date_arg(args, "dateFrom"),
            end=date_arg(args, "dateTo"),
            code=code,
        )
        return ok({"reports": [r.to_dict(include_penalties=admin) for r in reports]})
