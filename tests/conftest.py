from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.payroll_system.payroll_system.attendance.model import AttendanceDay
from src.payroll_system.payroll_system.bonus.model import BonusReport
from src.payroll_system.payroll_system.container import wire
from src.payroll_system.payroll_system.core.enums import DayMark, EmployeeStatus, Role
from src.payroll_system.payroll_system.employees.model import EmployeeProfile


class InMemoryEmployees:
    def __init__(self, profiles=()):
        self._by_code: dict[str, EmployeeProfile] = {p.code: p for p in profiles}

    def get_by_code(self, code: str) -> Optional[EmployeeProfile]:
        return self._by_code.get(code)

    def list_all(self, *, active_only: bool = False):
        items = sorted(self._by_code.values(), key=lambda p: p.code)
        return [p for p in items if p.is_active or not active_only]

    def create(self, profile: EmployeeProfile) -> None:
        self._by_code[profile.code] = profile

    def update(self, profile: EmployeeProfile) -> bool:
        if profile.code not in self._by_code:
            return False
        self._by_code[profile.code] = profile
        return True

    def set_status(self, code: str, status: EmployeeStatus) -> bool:
        if code not in self._by_code:
            return False
        self._by_code[code] = replace(self._by_code[code], status=status)
        return True

    def adjust_annual_leave_balance(self, code: str, delta: int) -> bool:
        p = self._by_code.get(code)
        if not p:
            return False
        self._by_code[code] = replace(p, annual_leave_balance=p.annual_leave_balance + int(delta))
        return True

    def reset_late_allowances(self, allowance: int) -> int:
        for code, p in list(self._by_code.items()):
            self._by_code[code] = replace(p, monthly_late_allowance=int(allowance))
        return len(self._by_code)

    def delete(self, code: str) -> bool:
        return self._by_code.pop(code, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceDay] = {}
        self._next_id = 1

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceDay]:
        for day in self._by_key.values():
            if day.attendance_id == int(attendance_id):
                return day
        return None

    def get_for_code_and_date(self, code: str, work_date: date) -> Optional[AttendanceDay]:
        return self._by_key.get((code, work_date))

    def list_days(self, *, start_date: date, end_date: date, code: Optional[str] = None):
        items = [
            d
            for d in self._by_key.values()
            if start_date <= d.work_date <= end_date and (code is None or d.code == code)
        ]
        return sorted(items, key=lambda d: (d.code, d.work_date))

    def save(self, day: AttendanceDay) -> int:
        key = (day.code, day.work_date)
        existing = self._by_key.get(key)
        if existing is not None:
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._next_id
            self._next_id += 1
        self._by_key[key] = day.with_changes(attendance_id=attendance_id)
        return attendance_id

    def count_annual_leave_days(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for d in self._by_key.values():
            if d.state.mark == DayMark.ANNUAL_LEAVE:
                counts[d.code] = counts.get(d.code, 0) + 1
        return counts

    def delete_all(self) -> int:
        count = len(self._by_key)
        self._by_key.clear()
        return count


class InMemoryBonusReports:
    def __init__(self):
        self._by_key: dict[tuple[str, date, date], BonusReport] = {}
        self._next_id = 1

    def get(self, code: str, date_from: date, date_to: date) -> Optional[BonusReport]:
        return self._by_key.get((code, date_from, date_to))

    def list_for_period(self, date_from: date, date_to: date, *, code: Optional[str] = None):
        items = [
            r
            for (c, f, t), r in self._by_key.items()
            if f == date_from and t == date_to and (code is None or c == code)
        ]
        return sorted(items, key=lambda r: r.code)

    def save(self, report: BonusReport) -> int:
        key = (report.code, report.date_from, report.date_to)
        existing = self._by_key.get(key)
        report_id = existing.report_id if existing else self._next_id
        if not existing:
            self._next_id += 1
        self._by_key[key] = report.with_changes(report_id=report_id)
        return report_id


def make_profile(code: str = "E1", **overrides) -> EmployeeProfile:
    values = dict(
        code=code,
        full_name=f"Employee {code}",
        department="Accounts",
        base_salary=Decimal("9000"),
        work_days_per_week=6,
    )
    values.update(overrides)
    return EmployeeProfile(**values)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 31, 18, 0, 0)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def bonus_repo() -> InMemoryBonusReports:
    return InMemoryBonusReports()


@pytest.fixture
def container(employees_repo, attendance_repo, bonus_repo, fixed_now):
    return wire(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        bonus_repo=bonus_repo,
        clock=lambda: fixed_now,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.payroll_system.payroll_system.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded_users(employees_repo):
    employees_repo.create(
        make_profile("admin", full_name="Admin", role=Role.ADMIN, password_hash=generate_password_hash("admin123"))
    )
    employees_repo.create(make_profile("E1", password_hash=generate_password_hash("secret1")))
    employees_repo.create(make_profile("E2", password_hash=generate_password_hash("secret2")))
    return employees_repo


@pytest.fixture
def login(client):
    def _login(code: str, password: str):
        return client.post("/api/auth/login", json={"code": code, "password": password})

    return _login
