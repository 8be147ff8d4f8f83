from __future__ import annotations

from decimal import Decimal

from ...common.money import ZERO, money
from ...core.constants import NOMINAL_WORKDAY_HOURS
from ...core.enums import PayrollWarning
from .base import PayBreakdown, PayrollCalculator, StatutoryDeductions

_NO_DEDUCTIONS = StatutoryDeductions(sss=ZERO, philhealth=ZERO, pagibig=ZERO)


def net_pay(gross_pay: Decimal, total_deductions: Decimal) -> Decimal:
    """Net pay never goes below zero."""
    return max(ZERO, money(gross_pay - total_deductions))


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    gross = days x daily rate; hourly = daily rate / 8;
    late deduction = late minutes / 60 x hourly;
    net = max(0, gross - statutory - late).

    A period with no payable days withholds nothing and pays nothing.
    """

    def compute(
        self,
        *,
        daily_rate: Decimal,
        payable_days: int,
        late_minutes: int,
        statutory: StatutoryDeductions,
    ) -> PayBreakdown:
        rate = money(daily_rate)
        hourly = rate / Decimal(NOMINAL_WORKDAY_HOURS)
        warnings = []

        if payable_days <= 0:
            warnings.append(PayrollWarning.ZERO_ATTENDANCE)
            return PayBreakdown(
                daily_rate=rate,
                hourly_rate=money(hourly),
                payable_days=0,
                gross_pay=ZERO,
                statutory=_NO_DEDUCTIONS,
                late_minutes=int(late_minutes),
                late_deduction=ZERO,
                total_deductions=ZERO,
                net_before_floor=ZERO,
                net_pay=ZERO,
                warnings=tuple(warnings),
            )

        gross = money(Decimal(payable_days) * rate)
        late_deduction = money(Decimal(int(late_minutes)) / Decimal(60) * hourly)
        total = money(statutory.total + late_deduction)
        raw_net = money(gross - total)
        if raw_net < ZERO:
            warnings.append(PayrollWarning.NEGATIVE_NET_PAY)

        return PayBreakdown(
            daily_rate=rate,
            hourly_rate=money(hourly),
            payable_days=int(payable_days),
            gross_pay=gross,
            statutory=statutory,
            late_minutes=int(late_minutes),
            late_deduction=late_deduction,
            total_deductions=total,
            net_before_floor=raw_net,
            net_pay=net_pay(gross, total),
            warnings=tuple(warnings),
        )
