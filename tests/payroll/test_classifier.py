from datetime import date
from decimal import Decimal

from src.payroll_system.payroll_system.attendance.model import AttendanceDay, DayState
from src.payroll_system.payroll_system.core.enums import DayCategory, DayMark
from src.payroll_system.payroll_system.payroll.classifier import classify_day, is_weekly_off

FRIDAY = date(2025, 3, 7)
SATURDAY = date(2025, 3, 8)
MONDAY = date(2025, 3, 10)


def test_weekly_off_days_depend_on_work_week():
    assert is_weekly_off(FRIDAY, 6)
    assert not is_weekly_off(SATURDAY, 6)
    assert is_weekly_off(FRIDAY, 5)
    assert is_weekly_off(SATURDAY, 5)
    assert not is_weekly_off(MONDAY, 5)


def test_unflagged_day_is_work_or_weekly_off():
    assert classify_day(AttendanceDay(code="E1", work_date=MONDAY), 6).category == DayCategory.WORK
    assert classify_day(AttendanceDay(code="E1", work_date=FRIDAY), 6).category == DayCategory.WEEKLY_OFF
    assert classify_day(AttendanceDay(code="E1", work_date=SATURDAY), 5).category == DayCategory.WEEKLY_OFF


def test_flag_takes_precedence_over_weekly_off():
    day = AttendanceDay(code="E1", work_date=FRIDAY, state=DayState(mark=DayMark.ANNUAL_LEAVE))
    assert classify_day(day, 6).category == DayCategory.ANNUAL_LEAVE


def test_valued_states_carry_their_value():
    day = AttendanceDay(
        code="E1",
        work_date=MONDAY,
        state=DayState(mark=DayMark.APPROPRIATE_VALUE, value=Decimal("150")),
    )
    classified = classify_day(day, 6)

    assert classified.category == DayCategory.APPROPRIATE_VALUE
    assert classified.value == Decimal("150")


def test_classification_is_deterministic():
    day = AttendanceDay(
        code="E1",
        work_date=MONDAY,
        work_hours=Decimal("9"),
        overtime_hours=Decimal("1"),
        late_minutes=20,
    )
    assert classify_day(day, 6) == classify_day(day, 6)


def test_punched_weekly_off_carries_no_figures():
    day = AttendanceDay(
        code="E1",
        work_date=FRIDAY,
        work_hours=Decimal("5"),
        late_minutes=90,
        late_deduction=Decimal("0.25"),
        early_leave_deduction=Decimal("0.5"),
    )
    classified = classify_day(day, 6)

    assert classified.category == DayCategory.WEEKLY_OFF
    assert classified.work_hours == 0
    assert classified.late_minutes == 0
    assert classified.late_deduction == 0
    assert classified.early_leave_deduction == 0
