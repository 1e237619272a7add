from __future__ import annotations

from decimal import Decimal

from ...employees.model import EmployeeProfile
from ..aggregator import PeriodTotals
from .base import BonusInputs, PayrollCalculator, SalaryFigures

_ZERO = Decimal("0")


class StandardPayrollCalculator(PayrollCalculator):
    """Fixed 30-day month valuation.

    daily = base / 30, hourly = daily / 9; overtime is paid at the hourly
    rate, leave compensation at twice the daily rate, and every deduction
    day costs one daily salary.
    """

    def meal_allowance(self, base_allowance: Decimal, absence_days: int) -> Decimal:
        base_allowance = Decimal(base_allowance)
        adjusted = base_allowance - self.rules.meal_forfeit_per_absence * Decimal(absence_days)
        return min(max(adjusted, _ZERO), max(base_allowance, _ZERO))

    def salary(self, profile: EmployeeProfile, totals: PeriodTotals) -> SalaryFigures:
        daily = self.daily_salary(profile.base_salary)
        hourly = self.hourly_rate(profile.base_salary)

        overtime_value = totals.total_overtime * hourly
        leave_compensation_value = (
            Decimal(totals.total_leave_compensation_days) * self.leave_compensation_day_value(profile.base_salary)
        )
        meal = self.meal_allowance(profile.meal_allowance, totals.total_absence_days)

        total_deductions = (
            Decimal(totals.total_absence_days) + totals.late_deduction_days + totals.medical_leave_deduction_days
        )
        violations = profile.penalties_value + profile.violations_installment
        deductions_value = total_deductions * daily + violations + profile.advances

        net = (
            profile.base_salary
            + meal
            + overtime_value
            + profile.eid_bonus
            + leave_compensation_value
            - profile.medical_insurance
            - profile.social_insurance
            - deductions_value
        )

        return SalaryFigures(
            daily_salary=daily,
            hourly_rate=hourly,
            overtime_value=overtime_value,
            leave_compensation_value=leave_compensation_value,
            meal_allowance=meal,
            total_deductions=total_deductions,
            deductions_value=deductions_value,
            total_violations_value=violations,
            net_salary=net,
        )

    def net_bonus(self, inputs: BonusInputs) -> Decimal:
        entitlement = Decimal(inputs.base_bonus) * Decimal(inputs.bonus_percentage) / Decimal(100)
        daily_bonus = entitlement / Decimal(self.rules.month_days)
        prorated = entitlement - Decimal(inputs.absences) * daily_bonus
        net = prorated + inputs.tie_up_value + inputs.production_value - inputs.advances - inputs.deductions
        return max(net, _ZERO)
