from src.payroll_system.payroll_system.payroll.aggregator import PeriodTotals
from src.payroll_system.payroll_system.payroll.reconciler import counted_days, reconcile_to_month


def test_short_period_topped_up_with_weekly_leave():
    totals = PeriodTotals(total_work_days=20, total_weekly_leave_days=4, total_absence_days=2)

    result = reconcile_to_month(totals)

    assert result.total_weekly_leave_days == 8
    assert counted_days(result) == 30
    assert result.total_work_days == 20
    assert result.total_absence_days == 2


def test_long_month_trims_weekly_leave():
    totals = PeriodTotals(total_work_days=27, total_weekly_leave_days=4)

    result = reconcile_to_month(totals)

    assert result.total_weekly_leave_days == 3
    assert counted_days(result) == 30


def test_weekly_leave_may_go_negative():
    result = reconcile_to_month(PeriodTotals(total_work_days=31))

    assert result.total_weekly_leave_days == -1
    assert counted_days(result) == 30


def test_appropriate_value_days_are_outside_the_month_sum():
    totals = PeriodTotals(total_work_days=26, total_weekly_leave_days=4, total_appropriate_value_days=3)

    assert reconcile_to_month(totals) == totals


def test_every_category_counts():
    totals = PeriodTotals(
        total_work_days=10,
        total_absence_days=1,
        total_annual_leave_days=2,
        total_medical_leave_days=3,
        total_official_leave_days=1,
        total_leave_compensation_days=1,
        total_weekly_leave_days=4,
    )
    assert reconcile_to_month(totals).total_weekly_leave_days == 12
