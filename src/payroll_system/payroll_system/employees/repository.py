from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[EmployeeProfile]:
        raise NotImplementedError

    def create(self, profile: EmployeeProfile) -> None:
        raise NotImplementedError

    def update(self, profile: EmployeeProfile) -> bool:
        """Replace every stored field of the employee identified by ``profile.code``."""

        raise NotImplementedError

    def set_status(self, code: str, status: EmployeeStatus) -> bool:
        raise NotImplementedError

    def adjust_annual_leave_balance(self, code: str, delta: int) -> bool:
        raise NotImplementedError

    def reset_late_allowances(self, allowance: int) -> int:
        raise NotImplementedError

    def delete(self, code: str) -> bool:
        raise NotImplementedError
