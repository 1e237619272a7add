from datetime import date, timedelta
from decimal import Decimal

from src.payroll_system.payroll_system.attendance.model import AttendanceDay, DayState
from src.payroll_system.payroll_system.core.enums import DayMark
from src.payroll_system.payroll_system.payroll.aggregator import (
    aggregate_period,
    fill_missing_days,
    running_late_allowance,
)
from src.payroll_system.payroll_system.payroll.classifier import classify_day
from src.payroll_system.payroll_system.payroll.reconciler import counted_days, reconcile_to_month


def _day(d: date, **kwargs) -> AttendanceDay:
    return AttendanceDay(code="E1", work_date=d, **kwargs)


def test_remaining_late_allowance_never_increases_within_a_month():
    days = [
        _day(date(2025, 3, 3), late_minutes=10),
        _day(date(2025, 3, 4)),
        _day(date(2025, 3, 5), late_minutes=50),
        _day(date(2025, 3, 6), late_minutes=100),
    ]
    classified = [classify_day(d, 6) for d in reversed(days)]

    running = running_late_allowance(classified, 120)

    assert [r for _, r in running] == [110, 110, 60, 0]
    assert [d for d, _ in running] == sorted(d for d, _ in running)


def test_remaining_late_allowance_restarts_each_month():
    days = [
        _day(date(2025, 3, 31), late_minutes=100),
        _day(date(2025, 4, 1), late_minutes=10),
    ]
    running = running_late_allowance([classify_day(d, 6) for d in days], 120)

    assert [r for _, r in running] == [20, 110]


def test_missing_dates_become_absence_or_weekly_leave():
    stored = [_day(date(2025, 3, 3), work_hours=Decimal("9"))]

    filled = fill_missing_days(stored, code="E1", start=date(2025, 3, 1), end=date(2025, 3, 7), work_days_per_week=6)

    assert [d.work_date for d in filled] == [date(2025, 3, 1) + timedelta(days=i) for i in range(7)]
    assert filled[2] is stored[0]
    marks = [d.state.mark for d in filled]
    assert marks.count(DayMark.ABSENCE) == 5
    # Friday 7th is the weekly day off of a six-day week
    assert filled[6].state.mark == DayMark.NONE


def test_aggregate_counts_and_sums():
    days = [
        _day(date(2025, 3, 3), work_hours=Decimal("9"), overtime_hours=Decimal("1"), late_minutes=50,
             late_deduction=Decimal("0.25")),
        _day(date(2025, 3, 4), work_hours=Decimal("8"), early_leave_deduction=Decimal("0.25")),
        _day(date(2025, 3, 5), state=DayState(mark=DayMark.ABSENCE)),
        _day(date(2025, 3, 6), state=DayState(mark=DayMark.MEDICAL_LEAVE), medical_leave_deduction=Decimal("0.25")),
        _day(date(2025, 3, 7)),
        _day(date(2025, 3, 8), state=DayState(mark=DayMark.LEAVE_COMPENSATION, value=Decimal("600"))),
        _day(date(2025, 3, 9), state=DayState(mark=DayMark.APPROPRIATE_VALUE, value=Decimal("120"))),
    ]

    totals = aggregate_period(days, work_days_per_week=6, monthly_late_allowance=120)

    assert totals.total_work_days == 2
    assert totals.total_absence_days == 1
    assert totals.total_medical_leave_days == 1
    assert totals.total_weekly_leave_days == 1
    assert totals.total_leave_compensation_days == 1
    assert totals.total_leave_compensation_value == Decimal("600")
    assert totals.total_appropriate_value_days == 1
    assert totals.total_appropriate_value == Decimal("120")
    assert totals.total_work_hours == Decimal("17")
    assert totals.total_overtime == Decimal("1")
    assert totals.total_late_minutes == 50
    assert totals.total_late_days == 1
    assert totals.remaining_late_allowance == 70
    assert totals.late_deduction_days == Decimal("0.25")
    assert totals.early_leave_deduction_days == Decimal("0.25")
    assert totals.medical_leave_deduction_days == Decimal("0.25")


def test_empty_thirty_one_day_month_reconciles_to_thirty():
    start, end = date(2025, 3, 1), date(2025, 3, 31)
    days = fill_missing_days([], code="E1", start=start, end=end, work_days_per_week=6)

    totals = aggregate_period(days, work_days_per_week=6, monthly_late_allowance=120)
    assert totals.total_absence_days == 27
    assert totals.total_weekly_leave_days == 4

    reconciled = reconcile_to_month(totals)
    assert reconciled.total_weekly_leave_days == 3
    assert counted_days(reconciled) == 30
