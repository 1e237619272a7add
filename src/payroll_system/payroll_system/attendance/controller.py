from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_clock
from ..common.web import admin_required, current_code, date_arg, fail, is_admin, json_body, login_required, ok
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..container import Container


def _clock_arg(data: dict, name: str):
    try:
        return parse_clock(data.get(name))
    except ValueError:
        raise ValidationError(f"{name} must be a time in HH:MM format")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/fingerprints", methods=["GET"], endpoint="fingerprints_list")
    @login_required
    def list_days():
        args = request.args
        code = args.get("code") or None
        if not is_admin():
            code = current_code()
        days = container.attendance_service.list_days(
            start=date_arg(args, "dateFrom"),
            end=date_arg(args, "dateTo"),
            code=code,
        )
        return ok({"fingerprints": [d.to_dict() for d in days]})

    @app.route("/api/fingerprints", methods=["POST"], endpoint="fingerprints_record")
    @admin_required
    def record_day():
        data = json_body()
        day = container.attendance_service.record_day(
            code=str(data.get("code") or ""),
            work_date=date_arg(data, "date"),
            check_in=_clock_arg(data, "checkIn"),
            check_out=_clock_arg(data, "checkOut"),
        )
        return ok({"fingerprint": day.to_dict()}, 201)

    @app.route("/api/fingerprints/<int:attendance_id>", methods=["PUT"], endpoint="fingerprints_edit")
    @admin_required
    def edit_day(attendance_id: int):
        data = json_body()
        day = container.attendance_service.edit_day(
            attendance_id,
            check_in=_clock_arg(data, "checkIn"),
            check_out=_clock_arg(data, "checkOut"),
            absence=bool(data.get("absence")),
            annual_leave=bool(data.get("annualLeave")),
            medical_leave=bool(data.get("medicalLeave")),
            official_leave=bool(data.get("officialLeave")),
            leave_compensation=bool(data.get("leaveCompensation")),
            appropriate_value=data.get("appropriateValue") or 0,
        )
        return ok({"fingerprint": day.to_dict()})

    @app.route("/api/fingerprints/<leave_type>", methods=["POST"], endpoint="fingerprints_leave")
    @admin_required
    def create_leave(leave_type: str):
        try:
            kind = LeaveType(leave_type)
        except ValueError:
            return fail("Unknown leave type", 404)
        data = json_body()
        result = container.attendance_service.create_leave(
            kind,
            date_from=date_arg(data, "dateFrom"),
            date_to=date_arg(data, "dateTo"),
            code=(str(data["code"]) if data.get("code") else None),
            value=data.get("value"),
        )
        return ok(result.to_dict(), 201)

    @app.route("/api/fingerprints/all", methods=["DELETE"], endpoint="fingerprints_purge")
    @admin_required
    def purge_all():
        return ok({"deleted": container.attendance_service.purge_all()})
