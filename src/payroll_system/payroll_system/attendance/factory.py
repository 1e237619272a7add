from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import DayMark
from .model import AttendanceDay
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayEvaluationStrategy
from .strategies.leave_strategy import LeaveDayStrategy
from .strategies.punched_strategy import PunchedDayStrategy
from .strategies.single_fingerprint_strategy import SingleFingerprintStrategy
from .strategies.weekly_off_strategy import WeeklyOffStrategy


@dataclass
class DayEvaluationFactory:
    """Factory Pattern: choose the evaluation strategy for a stored day."""

    def for_day(self, day: AttendanceDay, *, weekly_off: bool) -> DayEvaluationStrategy:
        if day.state.mark == DayMark.ABSENCE:
            return AbsentStrategy()
        if day.state.is_flagged:
            return LeaveDayStrategy()
        if weekly_off:
            return WeeklyOffStrategy()

        has_in = day.check_in is not None
        has_out = day.check_out is not None
        if has_in and has_out:
            return PunchedDayStrategy()
        if has_in or has_out:
            return SingleFingerprintStrategy()
        return AbsentStrategy()
