from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import (
    BASE_MEAL_ALLOWANCE,
    DEFAULT_ANNUAL_LEAVE_BALANCE,
    DEFAULT_MONTHLY_LATE_ALLOWANCE,
)
from ..core.enums import EmployeeStatus, Role

# Fields an admin may change in bulk and that feed the salary calculation.
FINANCIAL_FIELDS = (
    "base_salary",
    "base_bonus",
    "bonus_percentage",
    "meal_allowance",
    "medical_insurance",
    "social_insurance",
    "eid_bonus",
    "penalties_value",
    "violations_installment",
    "advances",
)

WEEKLY_OFF_DAYS = {
    5: frozenset({5, 6}),  # Friday, Saturday (isoweekday)
    6: frozenset({5}),
}


@dataclass(frozen=True)
class EmployeeProfile:
    """Domain entity: one employee with the inputs the payroll rules need."""

    code: str
    full_name: str
    password_hash: str = ""
    department: str = ""
    role: Role = Role.USER
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    base_salary: Decimal = Decimal("0")
    base_bonus: Decimal = Decimal("0")
    bonus_percentage: Decimal = Decimal("0")
    meal_allowance: Decimal = BASE_MEAL_ALLOWANCE
    medical_insurance: Decimal = Decimal("0")
    social_insurance: Decimal = Decimal("0")
    work_days_per_week: int = 6
    annual_leave_balance: int = DEFAULT_ANNUAL_LEAVE_BALANCE
    eid_bonus: Decimal = Decimal("0")
    penalties_value: Decimal = Decimal("0")
    violations_installment: Decimal = Decimal("0")
    advances: Decimal = Decimal("0")
    monthly_late_allowance: int = DEFAULT_MONTHLY_LATE_ALLOWANCE
    created_at: Optional[date] = field(default=None, compare=False)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    @property
    def weekly_off_days(self) -> frozenset[int]:
        return WEEKLY_OFF_DAYS.get(self.work_days_per_week, WEEKLY_OFF_DAYS[6])

    def is_weekly_off(self, work_date: date) -> bool:
        return work_date.isoweekday() in self.weekly_off_days

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "fullName": self.full_name,
            "department": self.department,
            "role": self.role.value,
            "status": self.status.value,
            "baseSalary": float(self.base_salary),
            "baseBonus": float(self.base_bonus),
            "bonusPercentage": float(self.bonus_percentage),
            "mealAllowance": float(self.meal_allowance),
            "medicalInsurance": float(self.medical_insurance),
            "socialInsurance": float(self.social_insurance),
            "workDaysPerWeek": self.work_days_per_week,
            "annualLeaveBalance": self.annual_leave_balance,
            "eidBonus": float(self.eid_bonus),
            "penaltiesValue": float(self.penalties_value),
            "violationsInstallment": float(self.violations_installment),
            "advances": float(self.advances),
            "monthlyLateAllowance": self.monthly_late_allowance,
        }
