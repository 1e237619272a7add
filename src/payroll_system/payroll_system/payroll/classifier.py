from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ..attendance.model import AttendanceDay
from ..core.enums import DayCategory, DayMark
from ..employees.model import WEEKLY_OFF_DAYS

_ZERO = Decimal("0")

_CATEGORY_BY_MARK = {
    DayMark.ABSENCE: DayCategory.ABSENCE,
    DayMark.ANNUAL_LEAVE: DayCategory.ANNUAL_LEAVE,
    DayMark.MEDICAL_LEAVE: DayCategory.MEDICAL_LEAVE,
    DayMark.OFFICIAL_LEAVE: DayCategory.OFFICIAL_LEAVE,
    DayMark.LEAVE_COMPENSATION: DayCategory.LEAVE_COMPENSATION,
    DayMark.APPROPRIATE_VALUE: DayCategory.APPROPRIATE_VALUE,
}


@dataclass(frozen=True)
class ClassifiedDay:
    """A day's payroll category together with the raw figures it carries."""

    work_date: date
    category: DayCategory
    work_hours: Decimal
    overtime_hours: Decimal
    late_minutes: int
    late_deduction: Decimal
    early_leave_deduction: Decimal
    medical_leave_deduction: Decimal
    value: Decimal


def is_weekly_off(work_date: date, work_days_per_week: int) -> bool:
    off_days = WEEKLY_OFF_DAYS.get(int(work_days_per_week), WEEKLY_OFF_DAYS[6])
    return work_date.isoweekday() in off_days


def classify_day(day: AttendanceDay, work_days_per_week: int) -> ClassifiedDay:
    """Assign exactly one payroll category to a day.

    A flagged state wins over the weekly-off default; an unflagged day on an
    off weekday is weekly leave; anything else is a work day. Weekly leave
    carries no hours or deductions even when the employee punched in.
    """
    category = _CATEGORY_BY_MARK.get(day.state.mark)
    if category is None:
        category = DayCategory.WEEKLY_OFF if is_weekly_off(day.work_date, work_days_per_week) else DayCategory.WORK

    if category == DayCategory.WEEKLY_OFF:
        return ClassifiedDay(
            work_date=day.work_date,
            category=category,
            work_hours=_ZERO,
            overtime_hours=_ZERO,
            late_minutes=0,
            late_deduction=_ZERO,
            early_leave_deduction=_ZERO,
            medical_leave_deduction=_ZERO,
            value=_ZERO,
        )

    return ClassifiedDay(
        work_date=day.work_date,
        category=category,
        work_hours=Decimal(day.work_hours),
        overtime_hours=Decimal(day.overtime_hours),
        late_minutes=int(day.late_minutes),
        late_deduction=Decimal(day.late_deduction),
        early_leave_deduction=Decimal(day.early_leave_deduction),
        medical_leave_deduction=Decimal(day.medical_leave_deduction),
        value=Decimal(day.state.value),
    )
