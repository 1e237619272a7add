from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, decimal_column, fetchall, fetchone
from .model import EmployeeProfile
from .repository import EmployeeRepository

_COLUMNS = """
    code, full_name, password_hash, department, role, status,
    base_salary, base_bonus, bonus_percentage, meal_allowance,
    medical_insurance, social_insurance, work_days_per_week,
    annual_leave_balance, eid_bonus, penalties_value,
    violations_installment, advances, monthly_late_allowance, created_at
"""


def _to_profile(r: Dict[str, Any]) -> EmployeeProfile:
    created_at = r.get("created_at")
    return EmployeeProfile(
        code=str(r["code"]),
        full_name=r["full_name"],
        password_hash=r.get("password_hash") or "",
        department=r.get("department") or "",
        role=Role(r["role"]),
        status=EmployeeStatus(r["status"]),
        base_salary=decimal_column(r.get("base_salary")),
        base_bonus=decimal_column(r.get("base_bonus")),
        bonus_percentage=decimal_column(r.get("bonus_percentage")),
        meal_allowance=decimal_column(r.get("meal_allowance")),
        medical_insurance=decimal_column(r.get("medical_insurance")),
        social_insurance=decimal_column(r.get("social_insurance")),
        work_days_per_week=int(r.get("work_days_per_week") or 6),
        annual_leave_balance=int(r.get("annual_leave_balance") or 0),
        eid_bonus=decimal_column(r.get("eid_bonus")),
        penalties_value=decimal_column(r.get("penalties_value")),
        violations_installment=decimal_column(r.get("violations_installment")),
        advances=decimal_column(r.get("advances")),
        monthly_late_allowance=int(r.get("monthly_late_allowance") or 0),
        created_at=created_at.date() if hasattr(created_at, "date") else created_at,
    )


def _params(p: EmployeeProfile) -> tuple:
    return (
        p.full_name,
        p.password_hash,
        p.department,
        p.role.value,
        p.status.value,
        p.base_salary,
        p.base_bonus,
        p.bonus_percentage,
        p.meal_allowance,
        p.medical_insurance,
        p.social_insurance,
        p.work_days_per_week,
        p.annual_leave_balance,
        p.eid_bonus,
        p.penalties_value,
        p.violations_installment,
        p.advances,
        p.monthly_late_allowance,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, code: str) -> Optional[EmployeeProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE code=%s", (code,))
            r = fetchone(cur)
            return _to_profile(r) if r else None

    def list_all(self, *, active_only: bool = False) -> Sequence[EmployeeProfile]:
        where = "WHERE status='active'" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees {where} ORDER BY code ASC")
            return [_to_profile(r) for r in fetchall(cur)]

    def create(self, profile: EmployeeProfile) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(
                    full_name, password_hash, department, role, status,
                    base_salary, base_bonus, bonus_percentage, meal_allowance,
                    medical_insurance, social_insurance, work_days_per_week,
                    annual_leave_balance, eid_bonus, penalties_value,
                    violations_installment, advances, monthly_late_allowance, code
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                _params(profile) + (profile.code,),
            )

    def update(self, profile: EmployeeProfile) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET full_name=%s, password_hash=%s, department=%s, role=%s, status=%s,
                    base_salary=%s, base_bonus=%s, bonus_percentage=%s, meal_allowance=%s,
                    medical_insurance=%s, social_insurance=%s, work_days_per_week=%s,
                    annual_leave_balance=%s, eid_bonus=%s, penalties_value=%s,
                    violations_installment=%s, advances=%s, monthly_late_allowance=%s
                WHERE code=%s
                """,
                _params(profile) + (profile.code,),
            )
            return cur.rowcount > 0

    def set_status(self, code: str, status: EmployeeStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET status=%s WHERE code=%s", (status.value, code))
            return cur.rowcount > 0

    def adjust_annual_leave_balance(self, code: str, delta: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET annual_leave_balance = annual_leave_balance + %s WHERE code=%s",
                (int(delta), code),
            )
            return cur.rowcount > 0

    def reset_late_allowances(self, allowance: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET monthly_late_allowance=%s", (int(allowance),))
            return int(cur.rowcount)

    def delete(self, code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE code=%s", (code,))
            return cur.rowcount > 0
