from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decimal_column, fetchall, fetchone, upsert_statement
from .model import AttendanceStats, BonusReport
from .repository import BonusReportRepository

_SAVE_COLUMNS = (
    "code",
    "full_name",
    "department",
    "base_bonus",
    "bonus_percentage",
    "work_days_per_week",
    "total_work_days",
    "absences",
    "annual_leave",
    "medical_leave",
    "total_leave_days",
    "tie_up_value",
    "production_value",
    "advances",
    "deductions",
    "net_bonus",
    "date_from",
    "date_to",
    "created_by",
    "updated_by",
)
# created_by is kept from the first save
_UPSERT = upsert_statement(
    "bonus_reports",
    _SAVE_COLUMNS,
    id_column="bonus_report_id",
    keys=("code", "date_from", "date_to", "created_by"),
)

_SELECT = """
    SELECT bonus_report_id, code, full_name, department, base_bonus, bonus_percentage,
           work_days_per_week, total_work_days, absences, annual_leave, medical_leave,
           total_leave_days, tie_up_value, production_value, advances, deductions,
           net_bonus, date_from, date_to, created_by, updated_by
    FROM bonus_reports
"""


def _to_report(r: Dict[str, Any]) -> BonusReport:
    return BonusReport(
        report_id=int(r["bonus_report_id"]),
        code=str(r["code"]),
        date_from=r["date_from"],
        date_to=r["date_to"],
        full_name=r.get("full_name") or "",
        department=r.get("department") or "",
        base_bonus=decimal_column(r.get("base_bonus")),
        bonus_percentage=decimal_column(r.get("bonus_percentage")),
        work_days_per_week=int(r.get("work_days_per_week") or 6),
        stats=AttendanceStats(
            total_work_days=int(r.get("total_work_days") or 0),
            absences=int(r.get("absences") or 0),
            annual_leave=int(r.get("annual_leave") or 0),
            medical_leave=int(r.get("medical_leave") or 0),
            total_leave_days=int(r.get("total_leave_days") or 0),
        ),
        tie_up_value=decimal_column(r.get("tie_up_value")),
        production_value=decimal_column(r.get("production_value")),
        advances=decimal_column(r.get("advances")),
        deductions=decimal_column(r.get("deductions")),
        net_bonus=decimal_column(r.get("net_bonus")),
        created_by=r.get("created_by"),
        updated_by=r.get("updated_by"),
    )


class MySQLBonusReportRepository(BonusReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, code: str, date_from: date, date_to: date) -> Optional[BonusReport]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE code=%s AND date_from=%s AND date_to=%s",
                (code, date_from, date_to),
            )
            r = fetchone(cur)
            return _to_report(r) if r else None

    def list_for_period(self, date_from: date, date_to: date, *, code: Optional[str] = None) -> Sequence[BonusReport]:
        clauses = ["date_from=%s", "date_to=%s"]
        params: list[object] = [date_from, date_to]
        if code is not None:
            clauses.append("code=%s")
            params.append(code)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY code ASC", tuple(params))
            return [_to_report(r) for r in fetchall(cur)]

    def save(self, report: BonusReport) -> int:
        s = report.stats
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _UPSERT,
                (
                    report.code,
                    report.full_name,
                    report.department,
                    report.base_bonus,
                    report.bonus_percentage,
                    report.work_days_per_week,
                    s.total_work_days,
                    s.absences,
                    s.annual_leave,
                    s.medical_leave,
                    s.total_leave_days,
                    report.tie_up_value,
                    report.production_value,
                    report.advances,
                    report.deductions,
                    report.net_bonus,
                    report.date_from,
                    report.date_to,
                    report.created_by,
                    report.updated_by,
                ),
            )
            return int(cur.lastrowid)
