from __future__ import annotations

from decimal import Decimal

from ...core.constants import DEFAULT_MEDICAL_LEAVE_DEDUCTION, STANDARD_SHIFT_HOURS
from ...core.enums import DayMark
from ..model import AttendanceDay
from .base import DayEvaluation, DayEvaluationStrategy


class LeaveDayStrategy(DayEvaluationStrategy):
    """Flagged day: no punches count. Annual leave is paid as a standard shift."""

    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        mark = day.state.mark
        return DayEvaluation(
            state=day.state,
            work_hours=Decimal(STANDARD_SHIFT_HOURS) if mark == DayMark.ANNUAL_LEAVE else Decimal("0"),
            medical_leave_deduction=DEFAULT_MEDICAL_LEAVE_DEDUCTION if mark == DayMark.MEDICAL_LEAVE else Decimal("0"),
        )
