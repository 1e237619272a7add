from __future__ import annotations

from ...core.enums import DayMark
from ..model import AttendanceDay, DayState
from .base import DayEvaluation, DayEvaluationStrategy


class AbsentStrategy(DayEvaluationStrategy):
    """No punches on a working day."""

    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        return DayEvaluation(state=DayState(mark=DayMark.ABSENCE))
