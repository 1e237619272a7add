from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.factory import DayEvaluationFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .bonus.mysql_bonus_repository import MySQLBonusReportRepository
from .bonus.repository import BonusReportRepository
from .bonus.service import BonusReportService
from .common.datetime_utils import now_local
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .payroll.calculator.base import PayrollCalculator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.late_policy import LateDeductionPolicy, RecordedLateDeductionPolicy
from .payroll.service import PayrollReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository
    bonus_repo: BonusReportRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    payroll_report_service: PayrollReportService
    bonus_service: BonusReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    bonus_repo: BonusReportRepository,
    late_policy: Optional[LateDeductionPolicy] = None,
    calculator: Optional[PayrollCalculator] = None,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Build the services on top of any repository implementations."""
    calculator = calculator or StandardPayrollCalculator()
    late_policy = late_policy or RecordedLateDeductionPolicy()

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        bonus_repo=bonus_repo,
        auth_service=AuthService(employees_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            evaluation_factory=DayEvaluationFactory(),
            calculator=calculator,
            clock=clock,
        ),
        payroll_report_service=PayrollReportService(
            attendance_repo,
            employees_repo,
            calculator=calculator,
            late_policy=late_policy,
        ),
        bonus_service=BonusReportService(bonus_repo, employees_repo, attendance_repo, calculator=calculator),
    )


def build_container(*, db_config: dict, late_policy: Optional[LateDeductionPolicy] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return wire(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        bonus_repo=MySQLBonusReportRepository(conn),
        late_policy=late_policy,
        conn=conn,
    )
