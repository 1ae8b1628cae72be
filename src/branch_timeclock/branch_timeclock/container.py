from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .advances.mysql_advance_repository import MySQLAdvanceRepository
from .advances.repository import AdvanceRepository
from .advances.service import AdvanceService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .branches.mysql_branch_repository import MySQLBranchRepository
from .branches.repository import BranchRepository
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .payroll.calculator.factory import BasePayCalculatorFactory
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    branches_repo: BranchRepository
    attendance_repo: AttendanceRepository
    advances_repo: AdvanceRepository
    payrolls_repo: PayrollRepository

    attendance_service: AttendanceService
    advance_service: AdvanceService
    payroll_service: PayrollService
    employee_service: EmployeeService
    report_service: ReportService


def build_services(
    *,
    employees_repo: EmployeeRepository,
    branches_repo: BranchRepository,
    attendance_repo: AttendanceRepository,
    advances_repo: AdvanceRepository,
    payrolls_repo: PayrollRepository,
    tz: Optional[tzinfo] = None,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    return Container(
        employees_repo=employees_repo,
        branches_repo=branches_repo,
        attendance_repo=attendance_repo,
        advances_repo=advances_repo,
        payrolls_repo=payrolls_repo,
        attendance_service=AttendanceService(attendance_repo, employees_repo, tz=tz),
        advance_service=AdvanceService(advances_repo, employees_repo, tz=tz),
        payroll_service=PayrollService(
            employees_repo,
            branches_repo,
            attendance_repo,
            advances_repo,
            payrolls_repo,
            calculators=BasePayCalculatorFactory(),
            tz=tz,
        ),
        employee_service=EmployeeService(employees_repo),
        report_service=ReportService(attendance_repo, advances_repo, payrolls_repo),
    )


def build_container(*, db_config: dict, tz: Optional[tzinfo] = None) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        branches_repo=MySQLBranchRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        advances_repo=MySQLAdvanceRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        tz=tz,
    )
