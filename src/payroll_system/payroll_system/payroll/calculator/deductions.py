from __future__ import annotations

from decimal import Decimal

from ...common.money import money
from ...core.constants import (
    DEFAULT_FLAT_DEDUCTION_TOTAL,
    DEFAULT_PAGIBIG_DEDUCTION,
    DEFAULT_PHILHEALTH_DEDUCTION,
    DEFAULT_SSS_DEDUCTION,
)
from ...core.enums import DeductionPolicy
from ...employees.model import Employee
from .base import DeductionStrategy, StatutoryDeductions


class PerEmployeeDeductions(DeductionStrategy):
    """Use the three amounts configured on the employee."""

    def statutory(self, employee: Employee) -> StatutoryDeductions:
        return StatutoryDeductions(
            sss=money(employee.sss_deduction),
            philhealth=money(employee.philhealth_deduction),
            pagibig=money(employee.pagibig_deduction),
        )


class FlatDeductions(DeductionStrategy):
    """Same fixed total for everyone, split in the default 300/250/200 proportion."""

    def __init__(self, total: Decimal = DEFAULT_FLAT_DEDUCTION_TOTAL):
        self._total = money(total)

    def statutory(self, employee: Employee) -> StatutoryDeductions:
        base = DEFAULT_SSS_DEDUCTION + DEFAULT_PHILHEALTH_DEDUCTION + DEFAULT_PAGIBIG_DEDUCTION
        sss = money(self._total * DEFAULT_SSS_DEDUCTION / base)
        philhealth = money(self._total * DEFAULT_PHILHEALTH_DEDUCTION / base)
        # Remainder keeps the components summing exactly to the total.
        return StatutoryDeductions(sss=sss, philhealth=philhealth, pagibig=self._total - sss - philhealth)


def deduction_strategy_for(
    policy: DeductionPolicy | str,
    *,
    flat_total: Decimal = DEFAULT_FLAT_DEDUCTION_TOTAL,
) -> DeductionStrategy:
    if DeductionPolicy(policy) == DeductionPolicy.FLAT:
        return FlatDeductions(flat_total)
    return PerEmployeeDeductions()
