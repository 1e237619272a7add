from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, time
from decimal import Decimal
from typing import Optional

from ..core.enums import DayMark
from ..core.exceptions import ValidationError

_VALUED_MARKS = (DayMark.LEAVE_COMPENSATION, DayMark.APPROPRIATE_VALUE)
_ZERO = Decimal("0")


@dataclass(frozen=True)
class DayState:
    """Exclusive state of a day: one mark, plus a value for the valued marks."""

    mark: DayMark = DayMark.NONE
    value: Decimal = _ZERO

    def __post_init__(self):
        if self.mark in _VALUED_MARKS:
            if self.value <= 0:
                raise ValidationError(f"{self.mark.value} requires a value greater than zero")
        elif self.value != 0:
            raise ValidationError(f"{self.mark.value} does not carry a value")

    @classmethod
    def from_flags(
        cls,
        *,
        absence: bool = False,
        annual_leave: bool = False,
        medical_leave: bool = False,
        official_leave: bool = False,
        leave_compensation: Decimal = _ZERO,
        appropriate_value: Decimal = _ZERO,
    ) -> "DayState":
        """Build the state from the legacy flag set, rejecting combinations."""
        candidates = [
            (bool(absence), DayMark.ABSENCE, _ZERO),
            (bool(annual_leave), DayMark.ANNUAL_LEAVE, _ZERO),
            (bool(medical_leave), DayMark.MEDICAL_LEAVE, _ZERO),
            (bool(official_leave), DayMark.OFFICIAL_LEAVE, _ZERO),
            (Decimal(leave_compensation or 0) > 0, DayMark.LEAVE_COMPENSATION, Decimal(leave_compensation or 0)),
            (Decimal(appropriate_value or 0) > 0, DayMark.APPROPRIATE_VALUE, Decimal(appropriate_value or 0)),
        ]
        chosen = [(mark, value) for is_set, mark, value in candidates if is_set]
        if len(chosen) > 1:
            raise ValidationError("Only one of absence or leave type can be set for a day")
        if not chosen:
            return cls()
        mark, value = chosen[0]
        return cls(mark=mark, value=value)

    @property
    def is_flagged(self) -> bool:
        return self.mark != DayMark.NONE

    @property
    def is_leave(self) -> bool:
        return self.mark in (
            DayMark.ANNUAL_LEAVE,
            DayMark.MEDICAL_LEAVE,
            DayMark.OFFICIAL_LEAVE,
            DayMark.LEAVE_COMPENSATION,
            DayMark.APPROPRIATE_VALUE,
        )


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one attendance record of an employee for a calendar date."""

    code: str
    work_date: date
    attendance_id: Optional[int] = None
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    work_hours: Decimal = _ZERO
    overtime_hours: Decimal = _ZERO
    late_minutes: int = 0
    late_deduction: Decimal = _ZERO
    early_leave_deduction: Decimal = _ZERO
    medical_leave_deduction: Decimal = _ZERO
    state: DayState = field(default_factory=DayState)
    single_fingerprint: bool = False
    annual_leave_balance: Optional[int] = None
    monthly_late_allowance: Optional[int] = None
    employee_name: str = ""

    def with_changes(self, **changes) -> "AttendanceDay":
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "code": self.code,
            "employeeName": self.employee_name,
            "date": self.work_date.strftime("%Y-%m-%d"),
            "checkIn": self.check_in.strftime("%H:%M") if self.check_in else None,
            "checkOut": self.check_out.strftime("%H:%M") if self.check_out else None,
            "workHours": float(self.work_hours),
            "overtime": float(self.overtime_hours),
            "lateMinutes": self.late_minutes,
            "lateDeduction": float(self.late_deduction),
            "earlyLeaveDeduction": float(self.early_leave_deduction),
            "medicalLeaveDeduction": float(self.medical_leave_deduction),
            "absence": self.state.mark == DayMark.ABSENCE,
            "annualLeave": self.state.mark == DayMark.ANNUAL_LEAVE,
            "medicalLeave": self.state.mark == DayMark.MEDICAL_LEAVE,
            "officialLeave": self.state.mark == DayMark.OFFICIAL_LEAVE,
            "leaveCompensation": float(self.state.value) if self.state.mark == DayMark.LEAVE_COMPENSATION else 0,
            "appropriateValue": float(self.state.value) if self.state.mark == DayMark.APPROPRIATE_VALUE else 0,
            "isSingleFingerprint": self.single_fingerprint,
            "annualLeaveBalance": self.annual_leave_balance,
            "monthlyLateAllowance": self.monthly_late_allowance,
        }
