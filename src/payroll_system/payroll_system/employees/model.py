from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import (
    DEFAULT_ANNUAL_SALARY,
    DEFAULT_DAILY_RATE,
    DEFAULT_PAGIBIG_DEDUCTION,
    DEFAULT_PHILHEALTH_DEDUCTION,
    DEFAULT_SSS_DEDUCTION,
)
from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Employee with compensation configuration."""

    employee_id: str
    name: str
    role: str
    daily_rate: Decimal = DEFAULT_DAILY_RATE
    annual_salary: Decimal = DEFAULT_ANNUAL_SALARY
    sss_deduction: Decimal = DEFAULT_SSS_DEDUCTION
    philhealth_deduction: Decimal = DEFAULT_PHILHEALTH_DEDUCTION
    pagibig_deduction: Decimal = DEFAULT_PAGIBIG_DEDUCTION
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    email: Optional[str] = None
    username: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_archived(self) -> bool:
        return self.status == EmployeeStatus.ARCHIVED


@dataclass(frozen=True)
class ArchivedEmployee:
    """Snapshot taken when an employee is archived."""

    employee_id: str
    name: str
    role: str
    salary: Decimal
    archived_at: datetime
    email: Optional[str] = None
    username: Optional[str] = None


@dataclass(frozen=True)
class CompensationUpdate:
    name: str
    role: str
    daily_rate: Decimal
    sss_deduction: Decimal
    philhealth_deduction: Decimal
    pagibig_deduction: Decimal
