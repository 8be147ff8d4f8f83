from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple

from ..core.enums import PayrollWarning, PayslipStatus, PeriodType
from .aggregation import PeriodSummary
from .calculator.base import PayBreakdown
from .periods import PayPeriod


@dataclass(frozen=True)
class Payslip:
    """Stored payroll result; identity is (employee_id, period_start)."""

    employee_id: str
    period_start: date
    period_end: date
    period_type: PeriodType
    days_worked: int
    leave_days: int
    payable_days: int
    daily_rate: Decimal
    gross_pay: Decimal
    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal
    statutory_deductions: Decimal
    late_deduction: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    worked_hours: Decimal
    payable_hours: Decimal
    late_minutes: int
    status: PayslipStatus = PayslipStatus.PENDING
    payslip_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_approved(self) -> bool:
        return self.status == PayslipStatus.APPROVED


@dataclass(frozen=True)
class PayrollPreview:
    """What the operator sees before confirming; nothing here is persisted."""

    employee_id: str
    employee_name: str
    period: PayPeriod
    summary: PeriodSummary
    breakdown: PayBreakdown
    existing: Optional[Payslip] = None
    warnings: Tuple[PayrollWarning, ...] = field(default_factory=tuple)

    @property
    def locked(self) -> bool:
        return self.existing is not None and self.existing.is_approved

    def to_payslip(self) -> Payslip:
        b = self.breakdown
        return Payslip(
            employee_id=self.employee_id,
            period_start=self.period.start,
            period_end=self.period.end,
            period_type=self.period.period_type,
            days_worked=self.summary.days_worked,
            leave_days=self.summary.leave_days,
            payable_days=b.payable_days,
            daily_rate=b.daily_rate,
            gross_pay=b.gross_pay,
            sss=b.statutory.sss,
            philhealth=b.statutory.philhealth,
            pagibig=b.statutory.pagibig,
            statutory_deductions=b.statutory.total,
            late_deduction=b.late_deduction,
            total_deductions=b.total_deductions,
            net_pay=b.net_pay,
            worked_hours=self.summary.worked_hours,
            payable_hours=self.summary.payable_hours,
            late_minutes=b.late_minutes,
            status=PayslipStatus.PENDING,
        )
