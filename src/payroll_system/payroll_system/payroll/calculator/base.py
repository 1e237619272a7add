from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...core.constants import (
    LEAVE_COMPENSATION_MULTIPLIER,
    MEAL_FORFEIT_PER_ABSENCE,
    NOMINAL_WORKDAY_HOURS,
    PAYROLL_MONTH_DAYS,
)
from ...employees.model import EmployeeProfile
from ..aggregator import PeriodTotals


@dataclass(frozen=True)
class PayrollRules:
    """Named constants the valuation formulas are parameterized by."""

    month_days: int = PAYROLL_MONTH_DAYS
    workday_hours: int = NOMINAL_WORKDAY_HOURS
    meal_forfeit_per_absence: Decimal = MEAL_FORFEIT_PER_ABSENCE
    leave_compensation_multiplier: Decimal = LEAVE_COMPENSATION_MULTIPLIER


@dataclass(frozen=True)
class SalaryFigures:
    """Monetary results at full precision. Rounding happens on presentation."""

    daily_salary: Decimal
    hourly_rate: Decimal
    overtime_value: Decimal
    leave_compensation_value: Decimal
    meal_allowance: Decimal
    total_deductions: Decimal
    deductions_value: Decimal
    total_violations_value: Decimal
    net_salary: Decimal


@dataclass(frozen=True)
class BonusInputs:
    base_bonus: Decimal
    bonus_percentage: Decimal
    absences: int
    tie_up_value: Decimal = Decimal("0")
    production_value: Decimal = Decimal("0")
    advances: Decimal = Decimal("0")
    deductions: Decimal = Decimal("0")


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    def __init__(self, rules: PayrollRules | None = None):
        self.rules = rules or PayrollRules()

    def daily_salary(self, base_salary: Decimal) -> Decimal:
        return Decimal(base_salary) / Decimal(self.rules.month_days)

    def hourly_rate(self, base_salary: Decimal) -> Decimal:
        return self.daily_salary(base_salary) / Decimal(self.rules.workday_hours)

    def leave_compensation_day_value(self, base_salary: Decimal) -> Decimal:
        return self.daily_salary(base_salary) * self.rules.leave_compensation_multiplier

    @abstractmethod
    def salary(self, profile: EmployeeProfile, totals: PeriodTotals) -> SalaryFigures:
        raise NotImplementedError

    @abstractmethod
    def net_bonus(self, inputs: BonusInputs) -> Decimal:
        raise NotImplementedError
