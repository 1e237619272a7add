from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import BonusReport


class BonusReportRepository(Protocol):
    def get(self, code: str, date_from: date, date_to: date) -> Optional[BonusReport]:
        raise NotImplementedError

    def list_for_period(self, date_from: date, date_to: date, *, code: Optional[str] = None) -> Sequence[BonusReport]:
        raise NotImplementedError

    def save(self, report: BonusReport) -> int:
        """Insert or replace the (code, dateFrom, dateTo) report; returns its id."""

        raise NotImplementedError
