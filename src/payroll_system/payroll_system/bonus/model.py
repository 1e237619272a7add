from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import money_json

_ZERO = Decimal("0")


@dataclass(frozen=True)
class AttendanceStats:
    total_work_days: int = 0
    absences: int = 0
    annual_leave: int = 0
    medical_leave: int = 0
    total_leave_days: int = 0


@dataclass(frozen=True)
class BonusReport:
    """Persisted bonus report of one employee for one month-aligned period."""

    code: str
    date_from: date
    date_to: date
    full_name: str = ""
    department: str = ""
    base_bonus: Decimal = _ZERO
    bonus_percentage: Decimal = _ZERO
    work_days_per_week: int = 6
    stats: AttendanceStats = AttendanceStats()
    tie_up_value: Decimal = _ZERO
    production_value: Decimal = _ZERO
    advances: Decimal = _ZERO
    deductions: Decimal = _ZERO
    net_bonus: Decimal = _ZERO
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    report_id: Optional[int] = None

    def with_changes(self, **changes) -> "BonusReport":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "code": self.code,
            "employeeName": self.full_name,
            "department": self.department,
            "baseBonus": money_json(self.base_bonus),
            "bonusPercentage": money_json(self.bonus_percentage),
            "workDaysPerWeek": self.work_days_per_week,
            "totalWorkDays": self.stats.total_work_days,
            "absences": self.stats.absences,
            "annualLeave": self.stats.annual_leave,
            "medicalLeave": self.stats.medical_leave,
            "totalLeaveDays": self.stats.total_leave_days,
            "tieUpValue": money_json(self.tie_up_value),
            "productionValue": money_json(self.production_value),
            "advances": money_json(self.advances),
            "deductions": money_json(self.deductions),
            "netBonus": money_json(self.net_bonus),
            "dateFrom": self.date_from.strftime("%Y-%m-%d"),
            "dateTo": self.date_to.strftime("%Y-%m-%d"),
            "createdBy": self.created_by,
            "updatedBy": self.updated_by,
        }
