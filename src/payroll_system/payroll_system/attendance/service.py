from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import iter_dates, month_start, now_local
from ..common.validators import require_non_negative, require_positive
from ..core.enums import DayMark, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import EmployeeProfile
from ..employees.repository import EmployeeRepository
from ..payroll.calculator.base import PayrollCalculator
from ..payroll.calculator.standard_calculator import StandardPayrollCalculator
from .factory import DayEvaluationFactory
from .model import AttendanceDay, DayState
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_BOOKED_LEAVE = (DayMark.ANNUAL_LEAVE, DayMark.MEDICAL_LEAVE, DayMark.OFFICIAL_LEAVE)


@dataclass(frozen=True)
class LeaveBookingResult:
    created: int = 0
    skipped: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"created": self.created, "skipped": list(self.skipped)}


@dataclass
class _LeavePlan:
    profile: EmployeeProfile
    dates: list[date]
    balance_delta: int = 0


class AttendanceService:
    """Use cases around stored attendance days: import, manual edit, leave booking."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        evaluation_factory: DayEvaluationFactory | None = None,
        calculator: PayrollCalculator | None = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._employees = employees
        self._factory = evaluation_factory or DayEvaluationFactory()
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def _profile(self, code: str) -> EmployeeProfile:
        profile = self._employees.get_by_code(code)
        if not profile:
            raise NotFoundError(f"Employee {code} not found")
        return profile

    def _remaining_allowance(self, profile: EmployeeProfile, work_date: date) -> int:
        start = month_start(work_date)
        if start == work_date:
            return max(0, int(profile.monthly_late_allowance))
        earlier = self._attendance.list_days(
            start_date=start, end_date=work_date - timedelta(days=1), code=profile.code
        )
        used = sum(int(d.late_minutes) for d in earlier)
        return max(0, int(profile.monthly_late_allowance) - used)

    def _evaluate(self, day: AttendanceDay, profile: EmployeeProfile) -> AttendanceDay:
        remaining = self._remaining_allowance(profile, day.work_date)
        strategy = self._factory.for_day(day, weekly_off=profile.is_weekly_off(day.work_date))
        evaluated = strategy.evaluate(day, remaining_allowance=remaining).apply_to(day)
        return evaluated.with_changes(
            monthly_late_allowance=max(0, remaining - evaluated.late_minutes),
            annual_leave_balance=profile.annual_leave_balance,
            employee_name=profile.full_name,
        )

    def _store(self, day: AttendanceDay) -> AttendanceDay:
        attendance_id = self._attendance.save(day)
        return day.with_changes(attendance_id=attendance_id)

    def _compensation_value(self, profile: EmployeeProfile) -> Decimal:
        if profile.base_salary <= 0:
            raise ValidationError(f"Employee {profile.code} has no base salary for leave compensation")
        return self._calculator.leave_compensation_day_value(profile.base_salary)

    def record_day(
        self,
        *,
        code: str,
        work_date: date,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
    ) -> AttendanceDay:
        """Write path for imported punches: upsert the (code, date) row and evaluate it."""
        if work_date > self._clock().date():
            raise ValidationError("Attendance cannot be recorded for a future date")
        profile = self._profile(code)

        existing = self._attendance.get_for_code_and_date(code, work_date)
        state = existing.state if existing and existing.state.is_leave else DayState()
        if state.is_leave and (check_in or check_out):
            logger.info("[attendance] %s %s is on %s, punches ignored", code, work_date, state.mark.value)
            check_in = check_out = None

        day = AttendanceDay(
            code=code,
            work_date=work_date,
            attendance_id=existing.attendance_id if existing else None,
            check_in=check_in,
            check_out=check_out,
            state=state,
        )
        return self._store(self._evaluate(day, profile))

    def edit_day(
        self,
        attendance_id: int,
        *,
        check_in: Optional[time] = None,
        check_out: Optional[time] = None,
        absence: bool = False,
        annual_leave: bool = False,
        medical_leave: bool = False,
        official_leave: bool = False,
        leave_compensation: bool = False,
        appropriate_value: Decimal = Decimal("0"),
    ) -> AttendanceDay:
        """Manual override of one day. All checks run before anything is written."""
        day = self._attendance.get_by_id(attendance_id)
        if not day:
            raise NotFoundError("Attendance record not found")
        profile = self._profile(day.code)

        appropriate_value = require_non_negative(appropriate_value, "appropriateValue")

        state = DayState.from_flags(
            absence=absence,
            annual_leave=annual_leave,
            medical_leave=medical_leave,
            official_leave=official_leave,
            leave_compensation=self._compensation_value(profile) if leave_compensation else Decimal("0"),
            appropriate_value=appropriate_value,
        )

        was_annual = day.state.mark == DayMark.ANNUAL_LEAVE
        is_annual = state.mark == DayMark.ANNUAL_LEAVE
        delta = 0
        if is_annual and not was_annual:
            if profile.annual_leave_balance <= 0:
                raise ValidationError("Annual leave balance is exhausted")
            delta = -1
        elif was_annual and not is_annual:
            delta = 1

        if state.is_flagged:
            check_in = check_out = None
        day = day.with_changes(check_in=check_in, check_out=check_out, state=state)

        if delta:
            self._employees.adjust_annual_leave_balance(profile.code, delta)
            profile = replace(profile, annual_leave_balance=profile.annual_leave_balance + delta)
            logger.info("[attendance] annual leave balance of %s changed by %+d", profile.code, delta)

        saved = self._store(self._evaluate(day, profile))
        logger.info("[attendance] day %s of %s edited (%s)", saved.work_date, saved.code, saved.state.mark.value)
        return saved

    def _plan_leave(
        self,
        leave_type: LeaveType,
        profile: EmployeeProfile,
        *,
        date_from: date,
        date_to: date,
        strict: bool,
    ) -> Optional[_LeavePlan]:
        dates = [d for d in iter_dates(date_from, date_to) if not profile.is_weekly_off(d)]
        existing = {d: self._attendance.get_for_code_and_date(profile.code, d) for d in dates}

        def reject(message: str) -> None:
            if strict:
                raise ValidationError(message)
            logger.warning("[attendance] skipping %s: %s", profile.code, message)

        if leave_type == LeaveType.LEAVE_COMPENSATION:
            if profile.base_salary <= 0:
                reject(f"employee {profile.code} has no base salary")
                return None
            dates = [d for d in dates if not (existing[d] and existing[d].state.mark in _BOOKED_LEAVE)]

        was_annual = sum(1 for d in dates if existing[d] and existing[d].state.mark == DayMark.ANNUAL_LEAVE)
        if leave_type == LeaveType.ANNUAL_LEAVE:
            needed = len(dates) - was_annual
            if needed > profile.annual_leave_balance:
                reject(
                    f"annual leave balance of {profile.code} is {profile.annual_leave_balance}, {needed} days requested"
                )
                return None
            delta = -needed
        else:
            delta = was_annual

        return _LeavePlan(profile=profile, dates=dates, balance_delta=delta)

    def create_leave(
        self,
        leave_type: LeaveType,
        *,
        date_from: date,
        date_to: date,
        code: Optional[str] = None,
        value=None,
    ) -> LeaveBookingResult:
        """Book one leave type on every working day of a range, for one employee or everyone active."""
        if date_from > date_to:
            raise ValidationError("dateFrom must not be after dateTo")

        appropriate_value = Decimal("0")
        if leave_type == LeaveType.APPROPRIATE_VALUE:
            appropriate_value = require_positive(value, "value")

        if code:
            profiles: Sequence[EmployeeProfile] = [self._profile(code)]
        else:
            profiles = self._employees.list_all(active_only=True)

        plans: list[_LeavePlan] = []
        skipped: list[str] = []
        for profile in profiles:
            plan = self._plan_leave(leave_type, profile, date_from=date_from, date_to=date_to, strict=bool(code))
            if plan is None:
                skipped.append(profile.code)
            else:
                plans.append(plan)

        created = 0
        for plan in plans:
            profile = plan.profile
            if plan.balance_delta:
                self._employees.adjust_annual_leave_balance(profile.code, plan.balance_delta)
                profile = replace(profile, annual_leave_balance=profile.annual_leave_balance + plan.balance_delta)

            if leave_type == LeaveType.LEAVE_COMPENSATION:
                state = DayState(mark=DayMark.LEAVE_COMPENSATION, value=self._compensation_value(profile))
            elif leave_type == LeaveType.APPROPRIATE_VALUE:
                state = DayState(mark=DayMark.APPROPRIATE_VALUE, value=appropriate_value)
            else:
                state = DayState(mark=leave_type.mark)

            for work_date in plan.dates:
                existing = self._attendance.get_for_code_and_date(profile.code, work_date)
                day = AttendanceDay(
                    code=profile.code,
                    work_date=work_date,
                    attendance_id=existing.attendance_id if existing else None,
                    state=state,
                )
                self._store(self._evaluate(day, profile))
                created += 1

            logger.info(
                "[attendance] %s booked for %s on %d day(s) between %s and %s",
                leave_type.value,
                profile.code,
                len(plan.dates),
                date_from,
                date_to,
            )

        return LeaveBookingResult(created=created, skipped=skipped)

    def list_days(self, *, start: date, end: date, code: Optional[str] = None) -> Sequence[AttendanceDay]:
        if start > end:
            raise ValidationError("dateFrom must not be after dateTo")
        return self._attendance.list_days(start_date=start, end_date=end, code=code)

    def purge_all(self) -> int:
        """Delete every attendance day and give booked annual leave back to its owners."""
        booked = self._attendance.count_annual_leave_days()
        deleted = self._attendance.delete_all()
        for code, days in booked.items():
            if days:
                self._employees.adjust_annual_leave_balance(code, days)
        logger.warning("[attendance] purged %d attendance day(s), restored annual leave for %d employee(s)", deleted, len(booked))
        return deleted
