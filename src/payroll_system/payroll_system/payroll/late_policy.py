from __future__ import annotations

from abc import ABC, abstractmethod
from collections import defaultdict
from decimal import Decimal
from typing import Sequence

from ..core.constants import DEFAULT_LATE_MINUTES_PER_DAY
from ..core.exceptions import ValidationError
from .classifier import ClassifiedDay


class LateDeductionPolicy(ABC):
    """Strategy: turn a period's lateness into deduction days."""

    @abstractmethod
    def deduction_days(self, days: Sequence[ClassifiedDay], *, monthly_late_allowance: int) -> Decimal:
        raise NotImplementedError


class RecordedLateDeductionPolicy(LateDeductionPolicy):
    """Sum the per-day late deductions stored when each day was evaluated."""

    def deduction_days(self, days: Sequence[ClassifiedDay], *, monthly_late_allowance: int) -> Decimal:
        return sum((d.late_deduction for d in days), Decimal("0"))


class MinutesRateLateDeductionPolicy(LateDeductionPolicy):
    """Charge late minutes beyond each month's allowance at a fixed minutes-per-day rate."""

    def __init__(self, minutes_per_day: int = DEFAULT_LATE_MINUTES_PER_DAY):
        if int(minutes_per_day) <= 0:
            raise ValidationError("LATE_MINUTES_PER_DAY must be greater than zero")
        self._minutes_per_day = Decimal(int(minutes_per_day))

    def deduction_days(self, days: Sequence[ClassifiedDay], *, monthly_late_allowance: int) -> Decimal:
        by_month: dict[tuple[int, int], int] = defaultdict(int)
        for d in days:
            by_month[(d.work_date.year, d.work_date.month)] += int(d.late_minutes)

        total = Decimal("0")
        for minutes in by_month.values():
            excess = max(0, minutes - int(monthly_late_allowance))
            total += Decimal(excess) / self._minutes_per_day
        return total


def build_late_policy(name: str, *, minutes_per_day: int = DEFAULT_LATE_MINUTES_PER_DAY) -> LateDeductionPolicy:
    key = (name or "recorded").strip().lower()
    if key == "recorded":
        return RecordedLateDeductionPolicy()
    if key in {"minutes", "minutes_rate"}:
        return MinutesRateLateDeductionPolicy(minutes_per_day)
    raise ValidationError(f"Unknown late deduction policy: {name}")
