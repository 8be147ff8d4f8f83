"""Pay-period window resolution.

Every boundary is a ``datetime.date`` in the local calendar. Weeks run Monday
to Sunday; months run from day 1 to the last calendar day. Sunday is never a
working day, so a week has at most 6 payable days.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator, List

from ..core.constants import RECENT_PERIODS
from ..core.enums import PeriodType
from ..core.exceptions import ValidationError

SUNDAY = 6  # date.weekday()


@dataclass(frozen=True)
class PayPeriod:
    period_type: PeriodType
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> Iterator[date]:
        day = self.start
        while day <= self.end:
            yield day
            day += timedelta(days=1)

    @property
    def label(self) -> str:
        if self.period_type == PeriodType.MONTHLY:
            return self.start.strftime("%B %Y")
        return f"{self.start:%b} {self.start.day} - {self.end:%b} {self.end.day}"


def week_start(ref: date) -> date:
    """Monday on or before ``ref``; a Sunday maps 6 days back, not 1 day forward."""
    return ref - timedelta(days=ref.weekday())


def resolve_weekly(today: date, offset: int = 0) -> PayPeriod:
    start = week_start(today) + timedelta(weeks=int(offset))
    return PayPeriod(PeriodType.WEEKLY, start, start + timedelta(days=6))


def _shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    y, m = divmod(year * 12 + (month - 1) + int(offset), 12)
    return y, m + 1


def resolve_monthly(today: date, offset: int = 0) -> PayPeriod:
    year, month = _shift_month(today.year, today.month, offset)
    last_day = calendar.monthrange(year, month)[1]
    return PayPeriod(PeriodType.MONTHLY, date(year, month, 1), date(year, month, last_day))


def resolve_period(period_type: PeriodType, today: date, offset: int = 0) -> PayPeriod:
    if PeriodType(period_type) == PeriodType.MONTHLY:
        return resolve_monthly(today, offset)
    return resolve_weekly(today, offset)


def period_for_start(period_type: PeriodType, start: date) -> PayPeriod:
    """Rebuild the period a stored ``period_start`` belongs to, rejecting misaligned starts."""
    period_type = PeriodType(period_type)
    if period_type == PeriodType.WEEKLY and start.weekday() != 0:
        raise ValidationError("Weekly periods must start on a Monday", field="period_start")
    if period_type == PeriodType.MONTHLY and start.day != 1:
        raise ValidationError("Monthly periods must start on the first day of a month", field="period_start")
    return resolve_period(period_type, start)


def max_working_days(period: PayPeriod) -> int:
    """Monday-Saturday days inside the window."""
    return sum(1 for day in period.days() if day.weekday() != SUNDAY)


def recent_periods(period_type: PeriodType, today: date, count: int = RECENT_PERIODS) -> List[PayPeriod]:
    """Current period first, then the ``count - 1`` before it."""
    return [resolve_period(period_type, today, -i) for i in range(int(count))]
