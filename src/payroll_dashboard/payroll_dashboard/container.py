from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .attendance.mysql_attendance_repository import MySQLAttendanceLogRepository
from .attendance.service import DailyLogService
from .core.constants import DEFAULT_LEAVE_ENTITLEMENTS, DEFAULT_LOG_EDIT_WINDOW_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLBranchRepository, MySQLEmployeeRepository
from .employees.service import DirectoryService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.rules import PayrollRules
from .payroll.service import PayrollService
from .payslips.projector import PayslipProjector
from .users.mysql_user_repository import MySQLUserRoleRepository
from .users.service import SessionService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    rules: PayrollRules

    employees_repo: MySQLEmployeeRepository
    branches_repo: MySQLBranchRepository
    logs_repo: MySQLAttendanceLogRepository
    payroll_repo: MySQLPayrollRepository
    roles_repo: MySQLUserRoleRepository

    session_service: SessionService
    daily_log_service: DailyLogService
    payroll_service: PayrollService
    directory_service: DirectoryService


def build_container(
    *,
    db_config: dict,
    payroll_rules: Mapping,
    company_name: str,
    edit_window_days: int = DEFAULT_LOG_EDIT_WINDOW_DAYS,
    leave_entitlements: Mapping[str, int] = DEFAULT_LEAVE_ENTITLEMENTS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    rules = PayrollRules.from_dict(payroll_rules)

    employees_repo = MySQLEmployeeRepository(conn)
    branches_repo = MySQLBranchRepository(conn)
    logs_repo = MySQLAttendanceLogRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)
    roles_repo = MySQLUserRoleRepository(conn)

    projector = PayslipProjector(company_name=company_name, rules=rules, leave_entitlements=leave_entitlements)

    return Container(
        conn=conn,
        rules=rules,
        employees_repo=employees_repo,
        branches_repo=branches_repo,
        logs_repo=logs_repo,
        payroll_repo=payroll_repo,
        roles_repo=roles_repo,
        session_service=SessionService(roles_repo),
        daily_log_service=DailyLogService(
            logs_repo,
            employees_repo,
            branches_repo,
            edit_window_days=edit_window_days,
        ),
        payroll_service=PayrollService(
            payroll_repo,
            logs_repo,
            employees_repo,
            branches_repo,
            rules=rules,
            projector=projector,
            calculator=StandardPayrollCalculator(),
            leave_entitlements=leave_entitlements,
        ),
        directory_service=DirectoryService(employees_repo),
    )
