from __future__ import annotations

import dataclasses
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

import pytest

from src.payroll_system.payroll_system.attendance.model import AttendanceRecord
from src.payroll_system.payroll_system.attendance.service import AttendanceService
from src.payroll_system.payroll_system.common.events import ChangeFeed
from src.payroll_system.payroll_system.container import Container
from src.payroll_system.payroll_system.core.enums import EmployeeStatus, LeaveStatus, LeaveType, PayslipStatus
from src.payroll_system.payroll_system.employees.model import ArchivedEmployee, Employee
from src.payroll_system.payroll_system.employees.service import EmployeeService
from src.payroll_system.payroll_system.leaves.model import LeaveRequest
from src.payroll_system.payroll_system.leaves.service import LeaveService
from src.payroll_system.payroll_system.payroll.model import Payslip
from src.payroll_system.payroll_system.payroll.service import PayrollService


class InMemoryEmployees:
    def __init__(self, archived_at: datetime = datetime(2025, 3, 12, 9, 0, 0)):
        self._by_id: dict[str, Employee] = {}
        self._archive: dict[str, ArchivedEmployee] = {}
        self.archived_at = archived_at

    def add(self, emp: Employee) -> Employee:
        self._by_id[emp.employee_id] = emp
        return emp

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        return self._by_id.get(str(employee_id))

    def list_by_status(self, status):
        return [e for e in self._by_id.values() if e.status == status]

    def update_compensation(self, *, employee_id, update) -> bool:
        emp = self._by_id.get(str(employee_id))
        if not emp:
            return False
        self._by_id[emp.employee_id] = dataclasses.replace(emp, **dataclasses.asdict(update))
        return True

    def update_deductions(self, *, employee_ids, sss_deduction, philhealth_deduction, pagibig_deduction) -> int:
        count = 0
        for employee_id in employee_ids:
            emp = self._by_id.get(str(employee_id))
            if not emp:
                continue
            self._by_id[emp.employee_id] = dataclasses.replace(
                emp,
                sss_deduction=sss_deduction,
                philhealth_deduction=philhealth_deduction,
                pagibig_deduction=pagibig_deduction,
            )
            count += 1
        return count

    def archive(self, *, employee) -> bool:
        emp = self._by_id.get(employee.employee_id)
        if not emp or emp.is_archived:
            return False
        self._by_id[emp.employee_id] = dataclasses.replace(emp, status=EmployeeStatus.ARCHIVED)
        self._archive[emp.employee_id] = ArchivedEmployee(
            employee_id=emp.employee_id,
            name=emp.name,
            role=emp.role,
            salary=emp.daily_rate,
            archived_at=self.archived_at,
            email=emp.email,
            username=emp.username,
        )
        return True

    def restore(self, *, employee_id) -> bool:
        emp = self._by_id.get(str(employee_id))
        if not emp or not emp.is_archived:
            return False
        self._by_id[emp.employee_id] = dataclasses.replace(emp, status=EmployeeStatus.ACTIVE)
        self._archive.pop(emp.employee_id, None)
        return True

    def get_archive_entry(self, employee_id):
        return self._archive.get(str(employee_id))

    def list_archived(self):
        return list(self._archive.values())


class InMemoryAttendance:
    def __init__(self):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id: str, work_date: date, *, late_minutes: int = 0, hours: str = "8.00") -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            time_in=datetime.combine(work_date, time(8, 0)),
            time_out=datetime.combine(work_date, time(17, 0)),
            worked_hours=Decimal(hours),
            payable_hours=Decimal(hours),
            late_minutes=late_minutes,
        )
        self._by_key[(employee_id, work_date)] = rec
        return rec

    def get_for_employee_and_date(self, employee_id, work_date):
        return self._by_key.get((str(employee_id), work_date))

    def get_in_range(self, employee_id, start_date, end_date):
        items = [
            r for (eid, d), r in self._by_key.items() if eid == str(employee_id) and start_date <= d <= end_date
        ]
        return sorted(items, key=lambda r: r.work_date)

    def list_range(self, *, start_date, end_date, employee_id=None):
        items = [r for r in self._by_key.values() if start_date <= r.work_date <= end_date]
        if employee_id:
            items = [r for r in items if r.employee_id == str(employee_id)]
        return sorted(items, key=lambda r: (r.work_date, r.employee_id))

    def get_recent_for_employee(self, employee_id, limit):
        items = [r for r in self._by_key.values() if r.employee_id == str(employee_id)]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def create_time_in(self, *, employee_id, work_date, time_in, late_minutes):
        key = (str(employee_id), work_date)
        if key not in self._by_key:
            self._id += 1
            self._by_key[key] = AttendanceRecord(
                attendance_id=self._id,
                employee_id=str(employee_id),
                work_date=work_date,
                time_in=time_in,
                late_minutes=late_minutes,
            )
        return self._by_key[key]

    def update_time_out(self, *, attendance_id, time_out, worked_hours, payable_hours) -> bool:
        for key, rec in self._by_key.items():
            if rec.attendance_id == attendance_id:
                self._by_key[key] = dataclasses.replace(
                    rec, time_out=time_out, worked_hours=worked_hours, payable_hours=payable_hours
                )
                return True
        return False

    def delete_open(self, *, attendance_id) -> bool:
        for key, rec in list(self._by_key.items()):
            if rec.attendance_id == attendance_id and rec.is_open:
                del self._by_key[key]
                return True
        return False


class InMemoryLeaves:
    def __init__(self):
        self._by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def add(self, employee_id, start_date, end_date, *, status=LeaveStatus.APPROVED, leave_type="Sick") -> LeaveRequest:
        leave_id = self._next_id
        self._next_id += 1
        req = LeaveRequest(
            leave_id=leave_id,
            employee_id=employee_id,
            leave_type=LeaveType(leave_type),
            start_date=start_date,
            end_date=end_date,
            reason="test",
            status=status,
        )
        self._by_id[leave_id] = req
        return req

    def create_leave(self, *, employee_id, leave_type, start_date, end_date, reason) -> int:
        leave_id = self._next_id
        self._next_id += 1
        self._by_id[leave_id] = LeaveRequest(
            leave_id=leave_id,
            employee_id=str(employee_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2025, 3, 1, 9, 0, 0),
        )
        return leave_id

    def get_leave(self, leave_id):
        return self._by_id.get(int(leave_id))

    def list_leave_requests(self, *, status=None, employee_id=None, limit=200):
        items = list(self._by_id.values())
        if status:
            items = [r for r in items if r.status == status]
        if employee_id:
            items = [r for r in items if r.employee_id == str(employee_id)]
        return items[:limit]

    def decide_leave(self, *, leave_id, status, admin_comment=None) -> bool:
        req = self._by_id.get(int(leave_id))
        if not req or req.status != LeaveStatus.PENDING:
            return False
        self._by_id[req.leave_id] = dataclasses.replace(req, status=status, admin_comment=admin_comment)
        return True

    def get_approved_overlapping(self, employee_id, start_date, end_date):
        return [
            r
            for r in self._by_id.values()
            if r.employee_id == str(employee_id)
            and r.status == LeaveStatus.APPROVED
            and r.start_date <= end_date
            and r.end_date >= start_date
        ]

    def count_by_status(self, status) -> int:
        return sum(1 for r in self._by_id.values() if r.status == status)


class InMemoryPayslips:
    def __init__(self):
        self._by_key: dict[tuple[str, date], Payslip] = {}
        self._next_id = 1
        self.upserts = 0

    def get_payslip(self, employee_id, period_start):
        return self._by_key.get((str(employee_id), period_start))

    def get_by_id(self, payslip_id):
        for slip in self._by_key.values():
            if slip.payslip_id == int(payslip_id):
                return slip
        return None

    def upsert_payslip(self, payslip):
        key = (payslip.employee_id, payslip.period_start)
        current = self._by_key.get(key)
        if current is not None and current.is_approved:
            return None
        if current is None:
            payslip_id = self._next_id
            self._next_id += 1
        else:
            payslip_id = current.payslip_id
        saved = dataclasses.replace(payslip, payslip_id=payslip_id, status=PayslipStatus.PENDING)
        self._by_key[key] = saved
        self.upserts += 1
        return saved

    def set_status(self, payslip_id, status, *, from_statuses):
        slip = self.get_by_id(payslip_id)
        if slip is None or slip.status not in from_statuses:
            return None
        updated = dataclasses.replace(slip, status=status)
        self._by_key[(slip.employee_id, slip.period_start)] = updated
        return updated

    def list_payslips(
        self,
        *,
        employee_id=None,
        status=None,
        period_start=None,
        start_from=None,
        start_to=None,
        limit=500,
    ):
        items = list(self._by_key.values())
        if employee_id:
            items = [s for s in items if s.employee_id == str(employee_id)]
        if status:
            items = [s for s in items if s.status == status]
        if period_start:
            items = [s for s in items if s.period_start == period_start]
        if start_from:
            items = [s for s in items if s.period_start >= start_from]
        if start_to:
            items = [s for s in items if s.period_start <= start_to]
        items.sort(key=lambda s: s.period_start, reverse=True)
        return items[:limit]

    def __len__(self):
        return len(self._by_key)


@pytest.fixture
def employees_repo():
    repo = InMemoryEmployees()
    repo.add(Employee(employee_id="E001", name="Ana Cruz", role="Cashier"))
    return repo


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo():
    return InMemoryLeaves()


@pytest.fixture
def payslips_repo():
    return InMemoryPayslips()


@pytest.fixture
def payroll_service(employees_repo, attendance_repo, leaves_repo, payslips_repo):
    return PayrollService(employees_repo, attendance_repo, leaves_repo, payslips_repo)


@pytest.fixture
def container(employees_repo, attendance_repo, leaves_repo, payslips_repo, payroll_service):
    return Container(
        conn=None,
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        payroll_service=payroll_service,
        change_feed=ChangeFeed(),
    )
