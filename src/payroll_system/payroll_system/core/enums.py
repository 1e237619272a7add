from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    USER = "user"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class DayMark(str, Enum):
    """Stored state of one attendance day. At most one mark per day."""

    NONE = "NONE"
    ABSENCE = "ABSENCE"
    ANNUAL_LEAVE = "ANNUAL_LEAVE"
    MEDICAL_LEAVE = "MEDICAL_LEAVE"
    OFFICIAL_LEAVE = "OFFICIAL_LEAVE"
    LEAVE_COMPENSATION = "LEAVE_COMPENSATION"
    APPROPRIATE_VALUE = "APPROPRIATE_VALUE"


class DayCategory(str, Enum):
    """Payroll category a day falls into after classification."""

    WORK = "WORK"
    ABSENCE = "ABSENCE"
    ANNUAL_LEAVE = "ANNUAL_LEAVE"
    MEDICAL_LEAVE = "MEDICAL_LEAVE"
    OFFICIAL_LEAVE = "OFFICIAL_LEAVE"
    LEAVE_COMPENSATION = "LEAVE_COMPENSATION"
    WEEKLY_OFF = "WEEKLY_OFF"
    APPROPRIATE_VALUE = "APPROPRIATE_VALUE"


class LeaveType(str, Enum):
    """Leave kinds that can be booked in bulk over a date range."""

    ANNUAL_LEAVE = "annual-leave"
    MEDICAL_LEAVE = "medical-leave"
    OFFICIAL_LEAVE = "official-leave"
    LEAVE_COMPENSATION = "leave-compensation"
    APPROPRIATE_VALUE = "appropriate-value"

    @property
    def mark(self) -> DayMark:
        return {
            LeaveType.ANNUAL_LEAVE: DayMark.ANNUAL_LEAVE,
            LeaveType.MEDICAL_LEAVE: DayMark.MEDICAL_LEAVE,
            LeaveType.OFFICIAL_LEAVE: DayMark.OFFICIAL_LEAVE,
            LeaveType.LEAVE_COMPENSATION: DayMark.LEAVE_COMPENSATION,
            LeaveType.APPROPRIATE_VALUE: DayMark.APPROPRIATE_VALUE,
        }[self]


class BulkUpdateMode(str, Enum):
    SET = "set"
    INCREMENT = "increment"
