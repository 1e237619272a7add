from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_end, month_start
from ..common.validators import require_non_negative
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import EmployeeProfile
from ..employees.repository import EmployeeRepository
from ..payroll.aggregator import aggregate_period
from ..payroll.calculator.base import BonusInputs, PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .model import AttendanceStats, BonusReport
from .repository import BonusReportRepository

logger = logging.getLogger(__name__)

# Values an edit may raise but never lower.
MONOTONIC_FIELDS = (("tie_up_value", "tieUpValue"), ("deductions", "deductions"))
_INPUT_FIELDS = (
    ("tie_up_value", "tieUpValue"),
    ("production_value", "productionValue"),
    ("advances", "advances"),
    ("deductions", "deductions"),
)


def snap_period(date_from: date, date_to: date) -> tuple[date, date]:
    """Align a period to whole months: first day of the start month to last day of the end month."""
    start, end = month_start(date_from), month_end(date_to)
    if start > end:
        raise ValidationError("dateFrom must not be after dateTo")
    return start, end


class BonusReportService:
    """Use case: per-period bonus reports with monotonic edits."""

    def __init__(
        self,
        bonus_reports: BonusReportRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._reports = bonus_reports
        self._employees = employees
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def _profile(self, code: str) -> EmployeeProfile:
        profile = self._employees.get_by_code(code)
        if not profile:
            raise NotFoundError(f"Employee {code} not found")
        return profile

    def attendance_stats(self, profile: EmployeeProfile, start: date, end: date) -> AttendanceStats:
        """Counts over the stored days of the period; missing dates are not counted."""
        days = self._attendance.list_days(start_date=start, end_date=end, code=profile.code)
        totals = aggregate_period(
            days,
            work_days_per_week=profile.work_days_per_week,
            monthly_late_allowance=profile.monthly_late_allowance,
        )
        return AttendanceStats(
            total_work_days=totals.total_work_days,
            absences=totals.total_absence_days,
            annual_leave=totals.total_annual_leave_days,
            medical_leave=totals.total_medical_leave_days,
            total_leave_days=(
                totals.total_annual_leave_days
                + totals.total_medical_leave_days
                + totals.total_official_leave_days
                + totals.total_leave_compensation_days
            ),
        )

    def _compute(self, report: BonusReport) -> BonusReport:
        net = self._calculator.net_bonus(
            BonusInputs(
                base_bonus=report.base_bonus,
                bonus_percentage=report.bonus_percentage,
                absences=report.stats.absences,
                tie_up_value=report.tie_up_value,
                production_value=report.production_value,
                advances=report.advances,
                deductions=report.deductions,
            )
        )
        return report.with_changes(net_bonus=net)

    def _fresh(self, profile: EmployeeProfile, start: date, end: date) -> BonusReport:
        report = BonusReport(
            code=profile.code,
            date_from=start,
            date_to=end,
            full_name=profile.full_name,
            department=profile.department,
            base_bonus=profile.base_bonus,
            bonus_percentage=profile.bonus_percentage,
            work_days_per_week=profile.work_days_per_week,
            stats=self.attendance_stats(profile, start, end),
            advances=profile.advances,
        )
        return self._compute(report)

    def get_reports(self, *, date_from: date, date_to: date, code: Optional[str] = None) -> Sequence[BonusReport]:
        """Stored reports of the period, or freshly computed ones when none were saved yet."""
        start, end = snap_period(date_from, date_to)
        stored = self._reports.list_for_period(start, end, code=code)
        if stored:
            return stored

        if code is not None:
            return [self._fresh(self._profile(code), start, end)]
        return [self._fresh(p, start, end) for p in self._employees.list_all(active_only=True) if not p.is_admin]

    def save_report(
        self,
        *,
        code: str,
        date_from: date,
        date_to: date,
        values: Mapping[str, Any],
        created_by: Optional[str] = None,
    ) -> BonusReport:
        start, end = snap_period(date_from, date_to)
        if self._reports.get(code, start, end):
            return self.update_report(code=code, date_from=start, date_to=end, values=values, updated_by=created_by)

        inputs = self._validated_inputs(values)
        report = self._fresh(self._profile(code), start, end).with_changes(created_by=created_by, **inputs)
        report = self._compute(report)
        report = report.with_changes(report_id=self._reports.save(report))
        logger.info("[bonus] report saved for %s %s..%s net=%s", code, start, end, report.net_bonus)
        return report

    def update_report(
        self,
        *,
        code: str,
        date_from: date,
        date_to: date,
        values: Mapping[str, Any],
        updated_by: Optional[str] = None,
    ) -> BonusReport:
        """Edit a report. tieUpValue and deductions may only grow; the stored report is untouched on rejection."""
        start, end = snap_period(date_from, date_to)
        profile = self._profile(code)
        inputs = self._validated_inputs(values)

        stored = self._reports.get(code, start, end)
        if stored is None:
            report = self._fresh(profile, start, end).with_changes(created_by=updated_by)
        else:
            for attr, key in MONOTONIC_FIELDS:
                if attr in inputs and inputs[attr] < getattr(stored, attr):
                    raise ValidationError(
                        f"{key} cannot be lower than the saved value {getattr(stored, attr)}"
                    )
            report = stored.with_changes(
                full_name=profile.full_name,
                department=profile.department,
                base_bonus=profile.base_bonus,
                bonus_percentage=profile.bonus_percentage,
                work_days_per_week=profile.work_days_per_week,
                stats=self.attendance_stats(profile, start, end),
            )

        report = self._compute(report.with_changes(updated_by=updated_by, **inputs))
        report = report.with_changes(report_id=self._reports.save(report))
        logger.info("[bonus] report updated for %s %s..%s net=%s", code, start, end, report.net_bonus)
        return report

    def _validated_inputs(self, values: Mapping[str, Any]) -> dict[str, Decimal]:
        return {
            attr: require_non_negative(values[key], key)
            for attr, key in _INPUT_FIELDS
            if key in values and values[key] is not None
        }
