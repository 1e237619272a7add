from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import EmployeeProfile
from ..employees.repository import EmployeeRepository
from .aggregator import PeriodTotals, aggregate_period, fill_missing_days
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .late_policy import LateDeductionPolicy, RecordedLateDeductionPolicy
from .model import SalaryReport
from .reconciler import reconcile_to_month

logger = logging.getLogger(__name__)


class PayrollReportService:
    """Use case: monthly salary reports, recomputed from attendance on each call."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        late_policy: Optional[LateDeductionPolicy] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._late_policy = late_policy or RecordedLateDeductionPolicy()

    def period_totals(self, profile: EmployeeProfile, *, start: date, end: date) -> PeriodTotals:
        """Aggregate and reconcile one employee's period (missing dates filled in)."""
        days = self._attendance.list_days(start_date=start, end_date=end, code=profile.code)
        days = fill_missing_days(
            days,
            code=profile.code,
            start=start,
            end=end,
            work_days_per_week=profile.work_days_per_week,
        )
        totals = aggregate_period(
            days,
            work_days_per_week=profile.work_days_per_week,
            monthly_late_allowance=profile.monthly_late_allowance,
            late_policy=self._late_policy,
        )
        return reconcile_to_month(totals)

    def build_report(self, profile: EmployeeProfile, *, start: date, end: date) -> SalaryReport:
        totals = self.period_totals(profile, start=start, end=end)
        figures = self._calculator.salary(profile, totals)
        return SalaryReport(profile=profile, date_from=start, date_to=end, totals=totals, figures=figures)

    def build_salary_reports(self, *, start: date, end: date, code: Optional[str] = None) -> list[SalaryReport]:
        if start > end:
            raise ValidationError("dateFrom must not be after dateTo")

        if code is not None:
            profile = self._employees.get_by_code(code)
            if not profile:
                raise NotFoundError(f"Employee {code} not found")
            if profile.base_salary <= 0:
                raise ValidationError(f"Employee {code} has no valid base salary")
            return [self.build_report(profile, start=start, end=end)]

        reports: list[SalaryReport] = []
        for profile in self._employees.list_all(active_only=True):
            if profile.base_salary <= 0:
                logger.warning("[payroll] skipping %s: invalid base salary %s", profile.code, profile.base_salary)
                continue
            reports.append(self.build_report(profile, start=start, end=end))
        return reports
