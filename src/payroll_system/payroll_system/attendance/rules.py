"""Punch arithmetic: lateness on clock-in, worked/payable hours on clock-out."""

from __future__ import annotations

from datetime import datetime, time
from decimal import ROUND_HALF_UP, Decimal

from ..common.datetime_utils import minutes_of_day
from ..core.constants import LUNCH_END, LUNCH_START, NOMINAL_WORKDAY_HOURS

HOURS = Decimal("0.01")


def late_minutes(now: datetime, *, shift_start: time, grace_minutes: int) -> int:
    """Minutes after shift start, or 0 while still inside the grace period.

    A late arrival is charged from the shift start, not from the end of the
    grace period (08:11 with 10 minutes grace is 11 minutes late).
    """
    arrived = minutes_of_day(now)
    start = minutes_of_day(shift_start)
    if arrived > start + int(grace_minutes):
        return arrived - start
    return 0


def lunch_overlap_minutes(time_in: datetime, time_out: datetime) -> int:
    lunch_start = datetime.combine(time_in.date(), LUNCH_START)
    lunch_end = datetime.combine(time_in.date(), LUNCH_END)
    overlap = min(time_out, lunch_end) - max(time_in, lunch_start)
    return max(int(overlap.total_seconds() // 60), 0)


def worked_minutes(time_in: datetime, time_out: datetime) -> int:
    """(out - in) rounded to the minute, minus the unpaid lunch hour, not below 0."""
    total = int(((time_out - time_in).total_seconds() + 30) // 60)
    return max(total - lunch_overlap_minutes(time_in, time_out), 0)


def worked_hours(time_in: datetime, time_out: datetime) -> Decimal:
    minutes = Decimal(worked_minutes(time_in, time_out))
    return (minutes / Decimal(60)).quantize(HOURS, rounding=ROUND_HALF_UP)


def payable_hours(hours: Decimal) -> Decimal:
    return min(hours, Decimal(NOMINAL_WORKDAY_HOURS)).quantize(HOURS)
