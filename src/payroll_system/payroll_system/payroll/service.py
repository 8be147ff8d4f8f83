from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import List, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..common.validators import require_int_in_range
from ..core.constants import NOMINAL_WORKDAY_HOURS, RECENT_PERIODS
from ..core.enums import PayrollWarning, PayslipStatus, PeriodType, RateBasis
from ..core.exceptions import (
    ConfirmationRequiredError,
    NotFoundError,
    PayslipLockedError,
    StateConflictError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .aggregation import aggregate_period
from .calculator.base import DeductionStrategy, PayrollCalculator
from .calculator.deductions import PerEmployeeDeductions
from .calculator.rates import daily_rate_for
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import Payslip, PayrollPreview
from .periods import PayPeriod, recent_periods
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Computes payslips from attendance + approved leave and stores them per period.

    ``calculate`` is read-only. ``confirm`` is the only write path: it re-reads
    the stored payslip right before upserting so that a payslip approved after
    the preview was shown is never overwritten.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        payslips: PayslipRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        deductions: Optional[DeductionStrategy] = None,
        rate_basis: RateBasis = RateBasis.DAILY,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._payslips = payslips
        self._calculator = calculator or StandardPayrollCalculator()
        self._deductions = deductions or PerEmployeeDeductions()
        self._rate_basis = RateBasis(rate_basis)

    def periods(
        self,
        period_type: PeriodType = PeriodType.WEEKLY,
        *,
        today: Optional[date] = None,
        count: int = RECENT_PERIODS,
    ) -> List[PayPeriod]:
        return recent_periods(PeriodType(period_type), today or now_local().date(), count)

    def _payable_employee(self, employee_id: str, period: PayPeriod) -> Employee:
        emp = self._employees.get_employee(str(employee_id))
        if not emp:
            raise NotFoundError(f"Employee {employee_id} not found")

        if emp.is_archived:
            entry = self._employees.get_archive_entry(emp.employee_id)
            if entry and period.start > entry.archived_at.date():
                raise ValidationError(
                    f"Employee {employee_id} was archived on {entry.archived_at.date()}; "
                    "only earlier periods can be paid",
                    field="employee_id",
                )
        return emp

    def calculate(
        self,
        employee_id: str,
        period: PayPeriod,
        *,
        late_minutes: Optional[int] = None,
    ) -> PayrollPreview:
        """Compute a payslip preview without writing anything.

        ``late_minutes`` replaces the attendance total (manual correction);
        leave it as None to use the sum of the period's records.
        """
        emp = self._payable_employee(employee_id, period)

        records = self._attendance.get_in_range(emp.employee_id, period.start, period.end)
        leaves = self._leaves.get_approved_overlapping(emp.employee_id, period.start, period.end)
        summary = aggregate_period(period, records, leaves)

        if late_minutes is None:
            late = summary.late_minutes
        else:
            late = require_int_in_range(
                late_minutes,
                "late_minutes",
                0,
                summary.max_days * NOMINAL_WORKDAY_HOURS * 60,
            )

        breakdown = self._calculator.compute(
            daily_rate=daily_rate_for(emp, self._rate_basis),
            payable_days=summary.payable_days,
            late_minutes=late,
            statutory=self._deductions.statutory(emp),
        )

        existing = self._payslips.get_payslip(emp.employee_id, period.start)
        warnings = list(breakdown.warnings)
        if existing is not None:
            warnings.append(PayrollWarning.PAYSLIP_APPROVED if existing.is_approved else PayrollWarning.EXISTING_PAYSLIP)

        return PayrollPreview(
            employee_id=emp.employee_id,
            employee_name=emp.name,
            period=period,
            summary=summary,
            breakdown=breakdown,
            existing=existing,
            warnings=tuple(warnings),
        )

    def confirm(
        self,
        employee_id: str,
        period: PayPeriod,
        *,
        late_minutes: Optional[int] = None,
        acknowledge_zero: bool = False,
    ) -> Payslip:
        """Recompute and upsert the payslip for (employee, period start)."""
        preview = self.calculate(employee_id, period, late_minutes=late_minutes)

        # Re-read: the preview's copy may be stale by now.
        current = self._payslips.get_payslip(preview.employee_id, period.start)
        if current is not None and current.is_approved:
            logger.warning("refused payroll write: payslip %s is approved", current.payslip_id)
            raise PayslipLockedError("Payslip is already approved; reject it before recomputing")

        if PayrollWarning.ZERO_ATTENDANCE in preview.warnings and not acknowledge_zero:
            raise ConfirmationRequiredError(
                "No attendance or approved leave in this period; the payslip will be 0.00. Confirm to continue.",
                warnings=[w.value for w in preview.warnings],
            )

        saved = self._payslips.upsert_payslip(preview.to_payslip())
        if saved is None:
            logger.warning(
                "refused payroll write: payslip for %s/%s was approved concurrently",
                preview.employee_id,
                period.start,
            )
            raise PayslipLockedError("Payslip is already approved; reject it before recomputing")

        if PayrollWarning.NEGATIVE_NET_PAY in preview.warnings:
            logger.warning(
                "net pay for %s/%s floored to 0 (deductions %s exceed gross %s)",
                preview.employee_id,
                period.start,
                preview.breakdown.total_deductions,
                preview.breakdown.gross_pay,
            )
        logger.info(
            "payslip %s saved: employee=%s period=%s..%s days=%d net=%s",
            saved.payslip_id,
            saved.employee_id,
            saved.period_start,
            saved.period_end,
            saved.payable_days,
            saved.net_pay,
        )
        return saved

    def get_payslip(self, payslip_id: int) -> Payslip:
        slip = self._payslips.get_by_id(int(payslip_id))
        if not slip:
            raise NotFoundError(f"Payslip {payslip_id} not found")
        return slip

    def _transition(self, payslip_id: int, status: PayslipStatus, from_statuses: Sequence[PayslipStatus]) -> Payslip:
        slip = self.get_payslip(payslip_id)
        if slip.status not in from_statuses:
            raise StateConflictError(f"Payslip is {slip.status.value}; cannot mark it {status.value}")

        updated = self._payslips.set_status(int(payslip_id), status, from_statuses=from_statuses)
        if updated is None:
            raise StateConflictError("Payslip status changed meanwhile, reload and retry")
        logger.info("payslip %s: %s -> %s", payslip_id, slip.status.value, status.value)
        return updated

    def approve(self, payslip_id: int) -> Payslip:
        return self._transition(payslip_id, PayslipStatus.APPROVED, (PayslipStatus.PENDING,))

    def reject(self, payslip_id: int) -> Payslip:
        return self._transition(payslip_id, PayslipStatus.REJECTED, (PayslipStatus.PENDING, PayslipStatus.APPROVED))

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayslipStatus] = None,
        period_start: Optional[date] = None,
    ) -> Sequence[Payslip]:
        return self._payslips.list_payslips(employee_id=employee_id, status=status, period_start=period_start)

    def employee_payslips(self, employee_id: str, *, year: int, month: int) -> Sequence[Payslip]:
        """An employee's payslips whose period starts inside the given month."""
        month = require_int_in_range(month, "month", 1, 12)
        year = require_int_in_range(year, "year", 2000, 9999)
        last_day = calendar.monthrange(year, month)[1]
        return self._payslips.list_payslips(
            employee_id=str(employee_id),
            start_from=date(year, month, 1),
            start_to=date(year, month, last_day),
        )
