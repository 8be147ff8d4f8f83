from __future__ import annotations

from decimal import Decimal

from ...common.money import money
from ...core.constants import WEEKS_PER_YEAR, WORKING_DAYS_PER_WEEK
from ...core.enums import RateBasis
from ...employees.model import Employee


def daily_rate_for(employee: Employee, basis: RateBasis | str = RateBasis.DAILY) -> Decimal:
    """Daily rate stored on the employee, or the legacy annual salary / 52 / 6."""
    if RateBasis(basis) == RateBasis.ANNUAL:
        return money(employee.annual_salary / Decimal(WEEKS_PER_YEAR) / Decimal(WORKING_DAYS_PER_WEEK))
    return money(employee.daily_rate)
