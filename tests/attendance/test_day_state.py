from decimal import Decimal

import pytest

from src.payroll_system.payroll_system.attendance.model import DayState
from src.payroll_system.payroll_system.core.enums import DayMark
from src.payroll_system.payroll_system.core.exceptions import ValidationError


def test_no_flags_is_unflagged():
    state = DayState.from_flags()
    assert state.mark == DayMark.NONE
    assert not state.is_flagged


def test_single_flag_maps_to_mark():
    assert DayState.from_flags(medical_leave=True).mark == DayMark.MEDICAL_LEAVE
    assert DayState.from_flags(absence=True).mark == DayMark.ABSENCE


def test_valued_flag_keeps_value():
    state = DayState.from_flags(leave_compensation=Decimal("600"))
    assert state.mark == DayMark.LEAVE_COMPENSATION
    assert state.value == Decimal("600")
    assert state.is_leave


@pytest.mark.parametrize(
    "flags",
    [
        {"absence": True, "annual_leave": True},
        {"medical_leave": True, "official_leave": True},
        {"annual_leave": True, "appropriate_value": Decimal("10")},
        {"leave_compensation": Decimal("600"), "appropriate_value": Decimal("10")},
    ],
)
def test_combined_flags_rejected(flags):
    with pytest.raises(ValidationError):
        DayState.from_flags(**flags)


def test_valued_marks_need_positive_value():
    with pytest.raises(ValidationError):
        DayState(mark=DayMark.APPROPRIATE_VALUE, value=Decimal("0"))
    with pytest.raises(ValidationError):
        DayState(mark=DayMark.ABSENCE, value=Decimal("5"))
