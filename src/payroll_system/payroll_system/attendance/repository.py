from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_in_range(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records with start_date <= work_date <= end_date."""

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_time_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        time_in: datetime,
        late_minutes: int,
    ) -> AttendanceRecord:
        """Insert keyed on (employee_id, work_date); an existing row is kept as-is."""

        raise NotImplementedError

    def update_time_out(
        self,
        *,
        attendance_id: int,
        time_out: datetime,
        worked_hours: Decimal,
        payable_hours: Decimal,
    ) -> bool:
        raise NotImplementedError

    def delete_open(self, *, attendance_id: int) -> bool:
        """Delete only while time_out is NULL."""

        raise NotImplementedError
