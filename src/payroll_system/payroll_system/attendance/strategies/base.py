from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ...common.datetime_utils import minutes_between
from ...core.constants import (
    LATE_GRACE_MINUTES,
    LATE_HALF_DAY_FROM,
    LATE_HALF_DEDUCTION,
    LATE_QUARTER_DEDUCTION,
    SHIFT_START,
)
from ..model import AttendanceDay, DayState

_ZERO = Decimal("0")


@dataclass(frozen=True)
class DayEvaluation:
    """Derived fields of one day, written back onto the stored record."""

    state: DayState = field(default_factory=DayState)
    work_hours: Decimal = _ZERO
    overtime_hours: Decimal = _ZERO
    late_minutes: int = 0
    late_deduction: Decimal = _ZERO
    early_leave_deduction: Decimal = _ZERO
    medical_leave_deduction: Decimal = _ZERO
    single_fingerprint: bool = False

    def apply_to(self, day: AttendanceDay) -> AttendanceDay:
        return day.with_changes(
            state=self.state,
            work_hours=self.work_hours,
            overtime_hours=self.overtime_hours,
            late_minutes=self.late_minutes,
            late_deduction=self.late_deduction,
            early_leave_deduction=self.early_leave_deduction,
            medical_leave_deduction=self.medical_leave_deduction,
            single_fingerprint=self.single_fingerprint,
        )


def hours(value: Decimal) -> Decimal:
    return Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def assess_late(check_in: Optional[time], remaining_allowance: int) -> tuple[int, Decimal]:
    """Return (late minutes, deduction days) for a check-in.

    Lateness within the grace period is free. Beyond it the day is covered
    by the monthly allowance when enough is left; otherwise a quarter day is
    deducted, or half a day for arrivals from 11:00.
    """
    if check_in is None:
        return 0, _ZERO
    late_minutes = max(0, minutes_between(SHIFT_START, check_in))
    if late_minutes <= LATE_GRACE_MINUTES:
        return late_minutes, _ZERO
    if remaining_allowance >= late_minutes:
        return late_minutes, _ZERO
    if check_in < LATE_HALF_DAY_FROM:
        return late_minutes, LATE_QUARTER_DEDUCTION
    return late_minutes, LATE_HALF_DEDUCTION


class DayEvaluationStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's hours and deductions are derived."""

    @abstractmethod
    def evaluate(self, day: AttendanceDay, *, remaining_allowance: int) -> DayEvaluation:
        raise NotImplementedError
