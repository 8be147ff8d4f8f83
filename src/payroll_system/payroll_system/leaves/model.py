from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: str
    leave_type: LeaveType
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None
    admin_comment: Optional[str] = None

    def days(self, window_start: Optional[date] = None, window_end: Optional[date] = None) -> Iterator[date]:
        """Calendar days of the inclusive range, optionally clipped to a window."""
        start = max(self.start_date, window_start) if window_start else self.start_date
        end = min(self.end_date, window_end) if window_end else self.end_date
        day = start
        while day <= end:
            yield day
            day += timedelta(days=1)
