from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.money import money_json, number_json
from ..employees.model import EmployeeProfile
from .aggregator import PeriodTotals
from .calculator.base import SalaryFigures

# Hidden from non-admin callers.
PENALTY_FIELDS = ("penaltiesValue", "violationsInstallment", "totalViolationsValue")


@dataclass(frozen=True)
class SalaryReport:
    """Read-model: one employee's reconciled month, recomputed on every query."""

    profile: EmployeeProfile
    date_from: date
    date_to: date
    totals: PeriodTotals
    figures: SalaryFigures

    def to_dict(self, *, include_penalties: bool = True) -> dict:
        p, t, f = self.profile, self.totals, self.figures
        data = {
            "code": p.code,
            "fullName": p.full_name,
            "department": p.department,
            "dateFrom": self.date_from.strftime("%Y-%m-%d"),
            "dateTo": self.date_to.strftime("%Y-%m-%d"),
            "workDaysPerWeek": p.work_days_per_week,
            "baseSalary": money_json(p.base_salary),
            "medicalInsurance": money_json(p.medical_insurance),
            "socialInsurance": money_json(p.social_insurance),
            "eidBonus": money_json(p.eid_bonus),
            "advances": money_json(p.advances),
            "penaltiesValue": money_json(p.penalties_value),
            "violationsInstallment": money_json(p.violations_installment),
            "annualLeaveBalance": p.annual_leave_balance,
            "totalWorkDays": t.total_work_days,
            "totalAbsenceDays": t.total_absence_days,
            "totalAnnualLeaveDays": t.total_annual_leave_days,
            "totalMedicalLeaveDays": t.total_medical_leave_days,
            "totalOfficialLeaveDays": t.total_official_leave_days,
            "totalLeaveCompensationDays": t.total_leave_compensation_days,
            "totalLeaveCompensationValue": money_json(t.total_leave_compensation_value),
            "totalAppropriateValueDays": t.total_appropriate_value_days,
            "totalAppropriateValue": money_json(t.total_appropriate_value),
            "totalWeeklyLeaveDays": t.total_weekly_leave_days,
            "totalWorkHours": number_json(t.total_work_hours),
            "totalOvertime": number_json(t.total_overtime),
            "totalLateMinutes": t.total_late_minutes,
            "totalLateDays": t.total_late_days,
            "remainingLateAllowance": t.remaining_late_allowance,
            "lateDeductionDays": number_json(t.late_deduction_days),
            "earlyLeaveDeductionDays": number_json(t.early_leave_deduction_days),
            "medicalLeaveDeductionDays": number_json(t.medical_leave_deduction_days),
            "dailySalary": money_json(f.daily_salary),
            "hourlyRate": money_json(f.hourly_rate),
            "overtimeValue": money_json(f.overtime_value),
            "leaveCompensationValue": money_json(f.leave_compensation_value),
            "mealAllowance": money_json(f.meal_allowance),
            "totalDeductions": number_json(f.total_deductions),
            "deductionsValue": money_json(f.deductions_value),
            "totalViolationsValue": money_json(f.total_violations_value),
            "netSalary": money_json(f.net_salary),
        }
        if not include_penalties:
            for key in PENALTY_FIELDS:
                data.pop(key, None)
        return data
