from __future__ import annotations

from ..core.constants import PAYROLL_MONTH_DAYS
from .aggregator import PeriodTotals


def counted_days(totals: PeriodTotals) -> int:
    """Days that take part in the fixed-month sum. Appropriate-value days do not."""
    return (
        totals.total_work_days
        + totals.total_absence_days
        + totals.total_annual_leave_days
        + totals.total_weekly_leave_days
        + totals.total_medical_leave_days
        + totals.total_official_leave_days
        + totals.total_leave_compensation_days
    )


def reconcile_to_month(totals: PeriodTotals, *, month_days: int = PAYROLL_MONTH_DAYS) -> PeriodTotals:
    """Absorb any difference from a fixed-length month into weekly leave.

    The weekly leave count may become negative when the period holds more
    counted days than the month.
    """
    difference = month_days - counted_days(totals)
    if difference == 0:
        return totals
    return totals.with_weekly_leave_days(totals.total_weekly_leave_days + difference)
