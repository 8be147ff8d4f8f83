from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One row per (employee, work_date); time_out stays None until clock-out."""

    attendance_id: int
    employee_id: str
    work_date: date
    time_in: datetime
    time_out: Optional[datetime] = None
    worked_hours: Decimal = Decimal("0")
    payable_hours: Decimal = Decimal("0")
    late_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.PRESENT

    @property
    def is_open(self) -> bool:
        return self.time_out is None
