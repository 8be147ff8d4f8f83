from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Tuple

from ...core.enums import PayrollWarning
from ...employees.model import Employee


@dataclass(frozen=True)
class StatutoryDeductions:
    sss: Decimal
    philhealth: Decimal
    pagibig: Decimal

    @property
    def total(self) -> Decimal:
        return self.sss + self.philhealth + self.pagibig


@dataclass(frozen=True)
class PayBreakdown:
    daily_rate: Decimal
    hourly_rate: Decimal
    payable_days: int
    gross_pay: Decimal
    statutory: StatutoryDeductions
    late_minutes: int
    late_deduction: Decimal
    total_deductions: Decimal
    net_before_floor: Decimal
    net_pay: Decimal
    warnings: Tuple[PayrollWarning, ...] = field(default_factory=tuple)


class DeductionStrategy(ABC):
    """Strategy Pattern: where the statutory withholding amounts come from."""

    @abstractmethod
    def statutory(self, employee: Employee) -> StatutoryDeductions:
        raise NotImplementedError


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        *,
        daily_rate: Decimal,
        payable_days: int,
        late_minutes: int,
        statutory: StatutoryDeductions,
    ) -> PayBreakdown:
        raise NotImplementedError
