from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import (
    require_min_length,
    require_non_empty,
    require_non_negative,
    require_work_days_per_week,
)
from ..core.constants import DEFAULT_MONTHLY_LATE_ALLOWANCE, MIN_PASSWORD_LENGTH
from ..core.enums import BulkUpdateMode, EmployeeStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import FINANCIAL_FIELDS, EmployeeProfile
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

# Request field name -> profile attribute.
_NUMERIC_FIELDS = {
    "baseSalary": "base_salary",
    "baseBonus": "base_bonus",
    "bonusPercentage": "bonus_percentage",
    "mealAllowance": "meal_allowance",
    "medicalInsurance": "medical_insurance",
    "socialInsurance": "social_insurance",
    "eidBonus": "eid_bonus",
    "penaltiesValue": "penalties_value",
    "violationsInstallment": "violations_installment",
    "advances": "advances",
}
_INT_FIELDS = {
    "annualLeaveBalance": "annual_leave_balance",
    "monthlyLateAllowance": "monthly_late_allowance",
}


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    code: str
    full_name: str
    role: Role


def _require_non_negative_int(value: Any, field_name: str) -> int:
    number = require_non_negative(value, field_name)
    if number != number.to_integral_value():
        raise ValidationError(f"{field_name} must be a whole number")
    return int(number)


def _profile_changes(data: Mapping[str, Any]) -> dict:
    """Validate the editable fields present in ``data``; absent keys are left alone."""
    changes: dict[str, Any] = {}
    for key, attr in _NUMERIC_FIELDS.items():
        if key in data:
            changes[attr] = require_non_negative(data[key], key)
    for key, attr in _INT_FIELDS.items():
        if key in data:
            changes[attr] = _require_non_negative_int(data[key], key)
    if "workDaysPerWeek" in data:
        changes["work_days_per_week"] = require_work_days_per_week(data["workDaysPerWeek"])
    if "fullName" in data:
        changes["full_name"] = require_non_empty(data["fullName"], "fullName")
    if "department" in data:
        changes["department"] = str(data["department"] or "").strip()
    if "password" in data and data["password"]:
        changes["password_hash"] = generate_password_hash(
            require_min_length(str(data["password"]), "password", MIN_PASSWORD_LENGTH)
        )
    return changes


class AuthService:
    """Use case: authenticate an employee (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, code: str, password: str) -> SessionUser:
        profile = self._employees.get_by_code(str(code or "").strip())
        if not profile or not profile.is_active:
            raise AuthenticationError("Invalid code or password")

        try:
            ok = check_password_hash(profile.password_hash, password or "")
        except ValueError:
            # e.g. empty or malformed stored hashes
            ok = False

        if not ok:
            raise AuthenticationError("Invalid code or password")

        return SessionUser(code=profile.code, full_name=profile.full_name, role=profile.role)


class EmployeeService:
    """Use case: manage employee records (admin)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, code: str) -> EmployeeProfile:
        profile = self._employees.get_by_code(code)
        if not profile:
            raise NotFoundError(f"Employee {code} not found")
        return profile

    def list_all(self) -> Sequence[EmployeeProfile]:
        return self._employees.list_all()

    def create(self, data: Mapping[str, Any]) -> EmployeeProfile:
        code = require_non_empty(data.get("code"), "code")
        full_name = require_non_empty(data.get("fullName"), "fullName")
        password = require_min_length(data.get("password") or "", "password", MIN_PASSWORD_LENGTH)

        try:
            role = Role(data.get("role") or Role.USER.value)
        except ValueError:
            raise ValidationError("role must be admin or user")

        if self._employees.get_by_code(code):
            raise ValidationError(f"Employee code {code} already exists")

        changes = _profile_changes({k: v for k, v in data.items() if k != "password"})
        base_salary = changes.get("base_salary", Decimal("0"))
        if base_salary <= 0:
            raise ValidationError("baseSalary must be greater than zero")

        changes.update(code=code, full_name=full_name, role=role, password_hash=generate_password_hash(password))
        profile = EmployeeProfile(**changes)
        self._employees.create(profile)
        logger.info("[employees] created %s (%s)", code, role.value)
        return profile

    def update(self, code: str, data: Mapping[str, Any]) -> EmployeeProfile:
        profile = self.get(code)
        changes = _profile_changes(data)
        if "base_salary" in changes and changes["base_salary"] <= 0:
            raise ValidationError("baseSalary must be greater than zero")
        if not changes:
            return profile

        updated = replace(profile, **changes)
        if not self._employees.update(updated):
            raise NotFoundError(f"Employee {code} not found")
        logger.info("[employees] updated %s: %s", code, ", ".join(sorted(changes)))
        return updated

    def bulk_update(self, data: Mapping[str, Any], *, mode: BulkUpdateMode = BulkUpdateMode.SET) -> int:
        """Apply the same financial change to every non-admin employee."""
        changes = {
            attr: value
            for attr, value in _profile_changes(data).items()
            if attr in FINANCIAL_FIELDS
        }
        if not changes:
            raise ValidationError("No financial field to update")

        targets = [p for p in self._employees.list_all() if not p.is_admin]
        updated: list[EmployeeProfile] = []
        for profile in targets:
            if mode == BulkUpdateMode.INCREMENT:
                new_values = {attr: getattr(profile, attr) + value for attr, value in changes.items()}
            else:
                new_values = dict(changes)
            if new_values.get("base_salary", profile.base_salary) <= 0:
                raise ValidationError(f"baseSalary of {profile.code} would not be greater than zero")
            updated.append(replace(profile, **new_values))

        for profile in updated:
            self._employees.update(profile)
        logger.info("[employees] bulk %s of %s on %d employee(s)", mode.value, ", ".join(sorted(changes)), len(updated))
        return len(updated)

    def set_status(self, code: str, status: str) -> EmployeeProfile:
        try:
            new_status = EmployeeStatus(status)
        except ValueError:
            raise ValidationError("status must be active or inactive")
        profile = self.get(code)
        self._employees.set_status(code, new_status)
        return replace(profile, status=new_status)

    def delete(self, code: str, *, current_code: Optional[str] = None) -> None:
        profile = self.get(code)
        if profile.is_admin:
            raise AuthorizationError("Admin accounts cannot be deleted, disable them instead")
        if current_code and current_code == code:
            raise ValidationError("You cannot delete your own account")
        if not self._employees.delete(code):
            raise NotFoundError(f"Employee {code} not found")
        logger.info("[employees] deleted %s", code)

    def reset_late_allowances(self, allowance: int = DEFAULT_MONTHLY_LATE_ALLOWANCE) -> int:
        """Restore every employee's monthly late allowance; run at the start of each month."""
        count = self._employees.reset_late_allowances(int(allowance))
        logger.info("[employees] monthly late allowance reset to %d for %d employee(s)", allowance, count)
        return count
