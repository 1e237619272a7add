from __future__ import annotations

from decimal import Decimal

from ...common.datetime_utils import minutes_between
from ...core.constants import (
    EARLY_LEAVE_HALF_DEDUCTION,
    EARLY_LEAVE_HALF_UNTIL,
    EARLY_LEAVE_QUARTER_DEDUCTION,
    EARLY_LEAVE_QUARTER_UNTIL,
    MAX_SHIFT_HOURS,
    STANDARD_SHIFT_HOURS,
)
from ..model import AttendanceDay
from .base import DayEvaluation, DayEvaluationStrategy, assess_late, hours


class PunchedDayStrategy(DayEvaluationStrategy):
    """Both punches present: hours, overtime, lateness and early leave."""

    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        assert day.check_in is not None and day.check_out is not None

        worked = hours(Decimal(minutes_between(day.check_in, day.check_out)) / Decimal(60))
        if worked < 0 or worked > MAX_SHIFT_HOURS:
            worked = Decimal("0")
        overtime = max(worked - STANDARD_SHIFT_HOURS, Decimal("0"))

        late_minutes, late_deduction = assess_late(day.check_in, remaining_allowance)

        early_leave = Decimal("0")
        if day.check_out <= EARLY_LEAVE_HALF_UNTIL:
            early_leave = EARLY_LEAVE_HALF_DEDUCTION
        elif day.check_out <= EARLY_LEAVE_QUARTER_UNTIL:
            early_leave = EARLY_LEAVE_QUARTER_DEDUCTION

        return DayEvaluation(
            work_hours=worked,
            overtime_hours=overtime,
            late_minutes=late_minutes,
            late_deduction=late_deduction,
            early_leave_deduction=early_leave,
        )
