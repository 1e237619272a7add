from __future__ import annotations

from ..model import AttendanceDay
from .base import DayEvaluation, DayEvaluationStrategy


class WeeklyOffStrategy(DayEvaluationStrategy):
    """Weekly-off day: punches are kept but earn no hours and cost no deductions."""

    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        return DayEvaluation()
