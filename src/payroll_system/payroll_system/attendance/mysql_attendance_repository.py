from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DayMark
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    decimal_column,
    fetchall,
    fetchone,
    int_column,
    time_column,
    upsert_statement,
)
from .model import AttendanceDay, DayState
from .repository import AttendanceRepository

_SAVE_COLUMNS = (
    "code",
    "work_date",
    "check_in",
    "check_out",
    "work_hours",
    "overtime_hours",
    "late_minutes",
    "late_deduction",
    "early_leave_deduction",
    "medical_leave_deduction",
    "day_mark",
    "day_value",
    "single_fingerprint",
    "annual_leave_balance",
    "monthly_late_allowance",
)
_UPSERT = upsert_statement(
    "attendance_days", _SAVE_COLUMNS, id_column="attendance_id", keys=("code", "work_date")
)

_SELECT = """
    SELECT
        ad.attendance_id, ad.code, ad.work_date, ad.check_in, ad.check_out,
        ad.work_hours, ad.overtime_hours, ad.late_minutes, ad.late_deduction,
        ad.early_leave_deduction, ad.medical_leave_deduction,
        ad.day_mark, ad.day_value, ad.single_fingerprint,
        ad.annual_leave_balance, ad.monthly_late_allowance,
        e.full_name
    FROM attendance_days ad
    LEFT JOIN employees e ON e.code = ad.code
"""


def _to_day(r: Dict[str, Any]) -> AttendanceDay:
    return AttendanceDay(
        attendance_id=int(r["attendance_id"]),
        code=str(r["code"]),
        work_date=r["work_date"],
        check_in=time_column(r.get("check_in")),
        check_out=time_column(r.get("check_out")),
        work_hours=decimal_column(r.get("work_hours")),
        overtime_hours=decimal_column(r.get("overtime_hours")),
        late_minutes=int(r.get("late_minutes") or 0),
        late_deduction=decimal_column(r.get("late_deduction")),
        early_leave_deduction=decimal_column(r.get("early_leave_deduction")),
        medical_leave_deduction=decimal_column(r.get("medical_leave_deduction")),
        state=DayState(mark=DayMark(r["day_mark"]), value=decimal_column(r.get("day_value"))),
        single_fingerprint=bool(r.get("single_fingerprint")),
        annual_leave_balance=int_column(r.get("annual_leave_balance")),
        monthly_late_allowance=int_column(r.get("monthly_late_allowance")),
        employee_name=r.get("full_name") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE ad.attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_day(r) if r else None

    def get_for_code_and_date(self, code: str, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE ad.code=%s AND ad.work_date=%s", (code, work_date))
            r = fetchone(cur)
            return _to_day(r) if r else None

    def list_days(self, *, start_date: date, end_date: date, code: Optional[str] = None) -> Sequence[AttendanceDay]:
        clauses = ["ad.work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if code is not None:
            clauses.append("ad.code=%s")
            params.append(code)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {where} ORDER BY ad.code ASC, ad.work_date ASC",
                tuple(params),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def save(self, day: AttendanceDay) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _UPSERT,
                (
                    day.code,
                    day.work_date,
                    day.check_in,
                    day.check_out,
                    day.work_hours,
                    day.overtime_hours,
                    int(day.late_minutes),
                    day.late_deduction,
                    day.early_leave_deduction,
                    day.medical_leave_deduction,
                    day.state.mark.value,
                    day.state.value,
                    1 if day.single_fingerprint else 0,
                    day.annual_leave_balance,
                    day.monthly_late_allowance,
                ),
            )
            return int(cur.lastrowid)

    def count_annual_leave_days(self) -> dict[str, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT code, COUNT(*) AS days FROM attendance_days WHERE day_mark=%s GROUP BY code",
                (DayMark.ANNUAL_LEAVE.value,),
            )
            return {str(r["code"]): int(r["days"]) for r in fetchall(cur)}

    def delete_all(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_days")
            return int(cur.rowcount)
