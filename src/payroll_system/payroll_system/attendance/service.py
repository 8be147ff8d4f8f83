from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LATE_GRACE_MINUTES, DEFAULT_SHIFT_START
from ..core.exceptions import NotFoundError, StateConflictError, ValidationError
from ..employees.repository import EmployeeRepository
from . import rules
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        shift_start: time = DEFAULT_SHIFT_START,
        grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shift_start = shift_start
        self._grace_minutes = int(grace_minutes)

    def _require_active(self, employee_id: str) -> None:
        emp = self._employees.get_employee(str(employee_id))
        if not emp:
            raise NotFoundError(f"Employee {employee_id} not found")
        if emp.is_archived:
            raise ValidationError("Archived employees cannot clock in or out", field="employee_id")

    def time_in(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Clock in. First in wins: a second time_in the same day returns the existing record."""
        now = now or now_local()
        today = now.date()

        self._require_active(employee_id)

        existing = self._attendance.get_for_employee_and_date(str(employee_id), today)
        if existing:
            return existing

        late = rules.late_minutes(now, shift_start=self._shift_start, grace_minutes=self._grace_minutes)
        record = self._attendance.create_time_in(
            employee_id=str(employee_id),
            work_date=today,
            time_in=now,
            late_minutes=late,
        )
        logger.info("time in: employee=%s date=%s late_minutes=%d", employee_id, today, record.late_minutes)
        return record

    def time_out(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Clock out. Last out wins: a later time_out overwrites the previous one."""
        now = now or now_local()
        today = now.date()

        self._require_active(employee_id)

        record = self._attendance.get_for_employee_and_date(str(employee_id), today)
        if not record:
            raise NotFoundError("No time in record for today")
        if now < record.time_in:
            raise ValidationError("Time out cannot be earlier than time in", field="time_out")

        worked = rules.worked_hours(record.time_in, now)
        payable = rules.payable_hours(worked)
        ok = self._attendance.update_time_out(
            attendance_id=record.attendance_id,
            time_out=now,
            worked_hours=worked,
            payable_hours=payable,
        )
        if not ok:
            raise StateConflictError("Attendance record changed while clocking out, reload and retry")

        logger.info("time out: employee=%s date=%s worked_hours=%s", employee_id, today, worked)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            employee_id=record.employee_id,
            work_date=record.work_date,
            time_in=record.time_in,
            time_out=now,
            worked_hours=worked,
            payable_hours=payable,
            late_minutes=record.late_minutes,
            status=record.status,
        )

    def cancel_time_in(self, employee_id: str, *, now: Optional[datetime] = None) -> None:
        """Undo a mistaken clock-in; only allowed before clock-out."""
        today = (now or now_local()).date()

        record = self._attendance.get_for_employee_and_date(str(employee_id), today)
        if not record:
            raise NotFoundError("No time in record to cancel")
        if not record.is_open:
            raise StateConflictError("Cannot cancel, employee has already timed out")

        if not self._attendance.delete_open(attendance_id=record.attendance_id):
            raise StateConflictError("Cannot cancel, employee has already timed out")
        logger.info("time in cancelled: employee=%s date=%s", employee_id, today)

    def today(self, employee_id: str, *, today: Optional[date] = None) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(str(employee_id), today or now_local().date())

    def history(self, employee_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_employee(str(employee_id), int(limit))

    def list_range(
        self,
        *,
        start: date,
        end: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        if end < start:
            raise ValidationError("End date must be on or after start date", field="end")
        return self._attendance.list_range(start_date=start, end_date=end, employee_id=employee_id)
