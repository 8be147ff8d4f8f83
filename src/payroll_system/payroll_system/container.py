from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import parse_clock_time
from .common.events import ChangeFeed
from .core.constants import (
    DEFAULT_DEDUCTION_MAX,
    DEFAULT_DEDUCTION_MIN,
    DEFAULT_FLAT_DEDUCTION_TOTAL,
    DEFAULT_LATE_GRACE_MINUTES,
)
from .core.enums import DeductionPolicy, PeriodType, RateBasis
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import DeductionBounds, EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .payroll.calculator.deductions import deduction_strategy_for
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.service import PayrollService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService

    change_feed: ChangeFeed
    default_period_type: PeriodType = PeriodType.WEEKLY


def build_container(*, db_config: dict, payroll: Optional[dict] = None) -> Container:
    payroll = dict(payroll or {})
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    payslips_repo = MySQLPayslipRepository(conn)

    employee_service = EmployeeService(
        employees_repo,
        bounds=DeductionBounds(
            minimum=Decimal(str(payroll.get("DEDUCTION_MIN", DEFAULT_DEDUCTION_MIN))),
            maximum=Decimal(str(payroll.get("DEDUCTION_MAX", DEFAULT_DEDUCTION_MAX))),
        ),
    )
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        shift_start=parse_clock_time(str(payroll.get("SHIFT_START", "08:00"))),
        grace_minutes=int(payroll.get("LATE_GRACE_MINUTES", DEFAULT_LATE_GRACE_MINUTES)),
    )
    leave_service = LeaveService(leaves_repo, employees_repo)
    payroll_service = PayrollService(
        employees_repo,
        attendance_repo,
        leaves_repo,
        payslips_repo,
        deductions=deduction_strategy_for(
            payroll.get("DEDUCTION_POLICY", DeductionPolicy.PER_EMPLOYEE.value),
            flat_total=Decimal(str(payroll.get("FLAT_DEDUCTION_TOTAL", DEFAULT_FLAT_DEDUCTION_TOTAL))),
        ),
        rate_basis=RateBasis(payroll.get("RATE_BASIS", RateBasis.DAILY.value)),
    )

    return Container(
        conn=conn,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        change_feed=ChangeFeed(),
        default_period_type=PeriodType(payroll.get("DEFAULT_PERIOD_TYPE", PeriodType.WEEKLY.value)),
    )
