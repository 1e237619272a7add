from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceDay, DayState
from ..common.datetime_utils import iter_dates
from ..core.enums import DayCategory, DayMark
from .classifier import ClassifiedDay, classify_day, is_weekly_off
from .late_policy import LateDeductionPolicy, RecordedLateDeductionPolicy

_ZERO = Decimal("0")


@dataclass(frozen=True)
class PeriodTotals:
    """Per-employee sums over a period, before the 30-day reconciliation."""

    total_work_days: int = 0
    total_absence_days: int = 0
    total_annual_leave_days: int = 0
    total_medical_leave_days: int = 0
    total_official_leave_days: int = 0
    total_leave_compensation_days: int = 0
    total_weekly_leave_days: int = 0
    total_appropriate_value_days: int = 0
    total_leave_compensation_value: Decimal = _ZERO
    total_appropriate_value: Decimal = _ZERO
    total_work_hours: Decimal = _ZERO
    total_overtime: Decimal = _ZERO
    total_late_minutes: int = 0
    total_late_days: int = 0
    remaining_late_allowance: int = 0
    late_deduction_days: Decimal = _ZERO
    early_leave_deduction_days: Decimal = _ZERO
    medical_leave_deduction_days: Decimal = _ZERO

    def with_weekly_leave_days(self, days: int) -> "PeriodTotals":
        return replace(self, total_weekly_leave_days=days)


def running_late_allowance(days: Iterable[ClassifiedDay], monthly_late_allowance: int) -> list[tuple[date, int]]:
    """Remaining allowance after each day, in ascending date order.

    The balance restarts at every calendar month and never goes below zero.
    """
    result: list[tuple[date, int]] = []
    current_month: Optional[tuple[int, int]] = None
    used = 0
    for d in sorted(days, key=lambda x: x.work_date):
        month = (d.work_date.year, d.work_date.month)
        if month != current_month:
            current_month = month
            used = 0
        used += int(d.late_minutes)
        result.append((d.work_date, max(0, int(monthly_late_allowance) - used)))
    return result


def fill_missing_days(
    days: Sequence[AttendanceDay],
    *,
    code: str,
    start: date,
    end: date,
    work_days_per_week: int,
) -> list[AttendanceDay]:
    """Cover every date of [start, end]; dates with no record become weekly leave or absence."""
    by_date = {d.work_date: d for d in days}
    filled: list[AttendanceDay] = []
    for day in iter_dates(start, end):
        existing = by_date.get(day)
        if existing is not None:
            filled.append(existing)
            continue
        if is_weekly_off(day, work_days_per_week):
            state = DayState()
        else:
            state = DayState(mark=DayMark.ABSENCE)
        filled.append(AttendanceDay(code=code, work_date=day, state=state))
    return filled


def aggregate_period(
    days: Sequence[AttendanceDay],
    *,
    work_days_per_week: int,
    monthly_late_allowance: int,
    late_policy: Optional[LateDeductionPolicy] = None,
) -> PeriodTotals:
    policy = late_policy or RecordedLateDeductionPolicy()
    classified = [classify_day(d, work_days_per_week) for d in days]

    counts = {category: 0 for category in DayCategory}
    for c in classified:
        counts[c.category] += 1

    def total(attr: str, category: Optional[DayCategory] = None) -> Decimal:
        return sum(
            (getattr(c, attr) for c in classified if category is None or c.category == category),
            _ZERO,
        )

    running = running_late_allowance(classified, monthly_late_allowance)
    remaining = running[-1][1] if running else int(monthly_late_allowance)

    return PeriodTotals(
        total_work_days=counts[DayCategory.WORK],
        total_absence_days=counts[DayCategory.ABSENCE],
        total_annual_leave_days=counts[DayCategory.ANNUAL_LEAVE],
        total_medical_leave_days=counts[DayCategory.MEDICAL_LEAVE],
        total_official_leave_days=counts[DayCategory.OFFICIAL_LEAVE],
        total_leave_compensation_days=counts[DayCategory.LEAVE_COMPENSATION],
        total_weekly_leave_days=counts[DayCategory.WEEKLY_OFF],
        total_appropriate_value_days=counts[DayCategory.APPROPRIATE_VALUE],
        total_leave_compensation_value=total("value", DayCategory.LEAVE_COMPENSATION),
        total_appropriate_value=total("value", DayCategory.APPROPRIATE_VALUE),
        total_work_hours=total("work_hours"),
        total_overtime=total("overtime_hours"),
        total_late_minutes=sum(c.late_minutes for c in classified),
        total_late_days=sum(1 for c in classified if c.late_deduction > 0),
        remaining_late_allowance=remaining,
        late_deduction_days=policy.deduction_days(classified, monthly_late_allowance=monthly_late_allowance),
        early_leave_deduction_days=total("early_leave_deduction"),
        medical_leave_deduction_days=total("medical_leave_deduction"),
    )
