from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import PayslipStatus
from .model import Payslip


class PayslipRepository(Protocol):
    def get_payslip(self, employee_id: str, period_start: date) -> Optional[Payslip]:
        raise NotImplementedError

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def upsert_payslip(self, payslip: Payslip) -> Optional[Payslip]:
        """Insert or overwrite on (employee_id, period_start).

        Returns None, writing nothing, when the stored row is APPROVED.
        """

        raise NotImplementedError

    def set_status(
        self,
        payslip_id: int,
        status: PayslipStatus,
        *,
        from_statuses: Sequence[PayslipStatus],
    ) -> Optional[Payslip]:
        """Conditional status change; None when the row is missing or not in ``from_statuses``."""

        raise NotImplementedError

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayslipStatus] = None,
        period_start: Optional[date] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[Payslip]:
        raise NotImplementedError
