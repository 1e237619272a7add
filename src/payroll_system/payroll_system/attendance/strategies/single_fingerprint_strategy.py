from __future__ import annotations

from decimal import Decimal

from ...core.constants import NOMINAL_WORKDAY_HOURS
from ..model import AttendanceDay
from .base import DayEvaluation, DayEvaluationStrategy, assess_late


class SingleFingerprintStrategy(DayEvaluationStrategy):
    """Only one punch was captured: credit a nominal workday, still judge a late arrival."""

    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        late_minutes, late_deduction = assess_late(day.check_in, remaining_allowance)
        return DayEvaluation(
            work_hours=Decimal(NOMINAL_WORKDAY_HOURS),
            late_minutes=late_minutes,
            late_deduction=late_deduction,
            single_fingerprint=True,
        )
