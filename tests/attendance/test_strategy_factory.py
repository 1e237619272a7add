from datetime import date, time

from src.payroll_system.payroll_system.attendance.factory import DayEvaluationFactory
from src.payroll_system.payroll_system.attendance.model import AttendanceDay, DayState
from src.payroll_system.payroll_system.attendance.strategies.absent_strategy import AbsentStrategy
from src.payroll_system.payroll_system.attendance.strategies.leave_strategy import LeaveDayStrategy
from src.payroll_system.payroll_system.attendance.strategies.punched_strategy import PunchedDayStrategy
from src.payroll_system.payroll_system.attendance.strategies.single_fingerprint_strategy import (
    SingleFingerprintStrategy,
)
from src.payroll_system.payroll_system.attendance.strategies.weekly_off_strategy import WeeklyOffStrategy
from src.payroll_system.payroll_system.core.enums import DayMark

DAY = date(2025, 3, 3)


def test_factory_picks_strategy_from_punches_and_state():
    factory = DayEvaluationFactory()

    both = AttendanceDay(code="E1", work_date=DAY, check_in=time(8, 30), check_out=time(17, 0))
    only_in = AttendanceDay(code="E1", work_date=DAY, check_in=time(8, 30))
    only_out = AttendanceDay(code="E1", work_date=DAY, check_out=time(17, 0))
    empty = AttendanceDay(code="E1", work_date=DAY)

    assert isinstance(factory.for_day(both, weekly_off=False), PunchedDayStrategy)
    assert isinstance(factory.for_day(only_in, weekly_off=False), SingleFingerprintStrategy)
    assert isinstance(factory.for_day(only_out, weekly_off=False), SingleFingerprintStrategy)
    assert isinstance(factory.for_day(empty, weekly_off=False), AbsentStrategy)
    assert isinstance(factory.for_day(empty, weekly_off=True), WeeklyOffStrategy)


def test_factory_respects_flagged_state():
    factory = DayEvaluationFactory()
    leave = AttendanceDay(code="E1", work_date=DAY, state=DayState(mark=DayMark.OFFICIAL_LEAVE))
    absent = AttendanceDay(code="E1", work_date=DAY, state=DayState(mark=DayMark.ABSENCE))

    assert isinstance(factory.for_day(leave, weekly_off=True), LeaveDayStrategy)
    assert isinstance(factory.for_day(absent, weekly_off=True), AbsentStrategy)


def test_weekly_off_wins_over_punches():
    factory = DayEvaluationFactory()
    friday = date(2025, 3, 7)
    both = AttendanceDay(code="E1", work_date=friday, check_in=time(10, 0), check_out=time(15, 0))
    only_in = AttendanceDay(code="E1", work_date=friday, check_in=time(10, 0))

    assert isinstance(factory.for_day(both, weekly_off=True), WeeklyOffStrategy)
    assert isinstance(factory.for_day(only_in, weekly_off=True), WeeklyOffStrategy)
