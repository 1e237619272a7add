from __future__ import annotations

from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.payroll_system.payroll_system.core.enums import BulkUpdateMode, EmployeeStatus, Role
from src.payroll_system.payroll_system.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from src.payroll_system.payroll_system.employees.service import AuthService, EmployeeService

from conftest import InMemoryEmployees, make_profile


@pytest.fixture
def repo():
    return InMemoryEmployees(
        [
            make_profile("admin", role=Role.ADMIN, password_hash=generate_password_hash("admin123")),
            make_profile("E1", password_hash=generate_password_hash("secret1")),
            make_profile("E2", base_salary=Decimal("6000")),
        ]
    )


@pytest.fixture
def svc(repo):
    return EmployeeService(repo)


def test_create_employee_hashes_password_and_applies_defaults(svc, repo):
    profile = svc.create({"code": "E3", "fullName": "New Hire", "password": "secret3", "baseSalary": "7500"})

    stored = repo.get_by_code("E3")
    assert stored == profile
    assert stored.password_hash != "secret3"
    assert stored.base_salary == Decimal("7500")
    assert stored.meal_allowance == Decimal("500")
    assert stored.annual_leave_balance == 21
    assert stored.monthly_late_allowance == 120


@pytest.mark.parametrize(
    "data",
    [
        {"code": "E1", "fullName": "Dup", "password": "secret1", "baseSalary": 100},
        {"code": "E3", "fullName": "Short", "password": "123", "baseSalary": 100},
        {"code": "E3", "fullName": "No salary", "password": "secret3"},
        {"code": "E3", "fullName": "Bad week", "password": "secret3", "baseSalary": 100, "workDaysPerWeek": 7},
        {"code": "E3", "fullName": "Negative", "password": "secret3", "baseSalary": 100, "advances": -5},
        {"code": "", "fullName": "No code", "password": "secret3", "baseSalary": 100},
    ],
)
def test_create_rejects_invalid_input(svc, data):
    with pytest.raises(ValidationError):
        svc.create(data)


def test_update_is_partial(svc, repo):
    svc.update("E1", {"advances": "250.5", "workDaysPerWeek": 5})

    stored = repo.get_by_code("E1")
    assert stored.advances == Decimal("250.5")
    assert stored.work_days_per_week == 5
    assert stored.base_salary == Decimal("9000")


def test_update_rejects_non_numeric(svc):
    with pytest.raises(ValidationError):
        svc.update("E1", {"eidBonus": "lots"})
    with pytest.raises(NotFoundError):
        svc.update("NOPE", {"eidBonus": 1})


def test_bulk_update_targets_non_admins(svc, repo):
    updated = svc.bulk_update({"eidBonus": 1000})

    assert updated == 2
    assert repo.get_by_code("E1").eid_bonus == Decimal("1000")
    assert repo.get_by_code("admin").eid_bonus == Decimal("0")


def test_bulk_increment(svc, repo):
    svc.bulk_update({"baseSalary": 500}, mode=BulkUpdateMode.INCREMENT)

    assert repo.get_by_code("E1").base_salary == Decimal("9500")
    assert repo.get_by_code("E2").base_salary == Decimal("6500")


def test_bulk_update_needs_a_financial_field(svc):
    with pytest.raises(ValidationError):
        svc.bulk_update({"fullName": "Everyone"})


def test_admin_cannot_be_deleted_but_can_be_disabled(svc, repo):
    with pytest.raises(AuthorizationError):
        svc.delete("admin")

    svc.set_status("admin", "inactive")
    assert repo.get_by_code("admin").status == EmployeeStatus.INACTIVE


def test_delete_employee(svc, repo):
    svc.delete("E2", current_code="admin")
    assert repo.get_by_code("E2") is None


def test_reset_late_allowances(svc, repo):
    repo.update(make_profile("E1", monthly_late_allowance=10))

    assert svc.reset_late_allowances() == 3
    assert repo.get_by_code("E1").monthly_late_allowance == 120


def test_authenticate(repo):
    auth = AuthService(repo)

    user = auth.authenticate("E1", "secret1")
    assert user.code == "E1"
    assert user.role == Role.USER

    with pytest.raises(AuthenticationError):
        auth.authenticate("E1", "wrong")
    with pytest.raises(AuthenticationError):
        auth.authenticate("E2", "anything")


def test_inactive_employee_cannot_log_in(repo):
    repo.set_status("E1", EmployeeStatus.INACTIVE)

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("E1", "secret1")
