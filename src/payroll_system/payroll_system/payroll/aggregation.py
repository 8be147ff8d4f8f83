"""Turn a period's attendance and approved leave into payable days and lateness."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Set

from ..attendance.model import AttendanceRecord
from ..core.enums import LeaveStatus
from ..leaves.model import LeaveRequest
from .periods import SUNDAY, PayPeriod, max_working_days


@dataclass(frozen=True)
class PeriodSummary:
    days_worked: int
    leave_days: int
    payable_days: int
    max_days: int
    worked_hours: Decimal
    payable_hours: Decimal
    late_minutes: int


def aggregate_period(
    period: PayPeriod,
    attendance: Iterable[AttendanceRecord],
    leaves: Iterable[LeaveRequest],
) -> PeriodSummary:
    """Count payable days for one employee and one period.

    A day with both an attendance record and approved leave counts once.
    Leave is clipped to the window and skips Sundays; overlapping leave
    requests are merged.
    The total is capped at the period's Monday-Saturday day count.
    """
    in_window = [r for r in attendance if period.contains(r.work_date)]
    worked_dates: Set = {r.work_date for r in in_window}

    leave_dates: Set = set()
    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED:
            continue
        leave_dates.update(d for d in leave.days(period.start, period.end) if d.weekday() != SUNDAY)
    leave_dates -= worked_dates

    max_days = max_working_days(period)
    payable = min(len(worked_dates) + len(leave_dates), max_days)

    return PeriodSummary(
        days_worked=len(worked_dates),
        leave_days=len(leave_dates),
        payable_days=payable,
        max_days=max_days,
        worked_hours=sum((r.worked_hours for r in in_window), Decimal("0")),
        payable_hours=sum((r.payable_hours for r in in_window), Decimal("0")),
        late_minutes=sum(int(r.late_minutes or 0) for r in in_window),
    )
