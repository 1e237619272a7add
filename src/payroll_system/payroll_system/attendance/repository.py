from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceDay


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def get_for_code_and_date(self, code: str, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def list_days(self, *, start_date: date, end_date: date, code: Optional[str] = None) -> Sequence[AttendanceDay]:
        """Days in [start_date, end_date], ordered by code then ascending date."""

        raise NotImplementedError

    def save(self, day: AttendanceDay) -> int:
        """Insert or replace the (code, date) row; returns its id."""

        raise NotImplementedError

    def count_annual_leave_days(self) -> dict[str, int]:
        raise NotImplementedError

    def delete_all(self) -> int:
        raise NotImplementedError
