from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import EmployeeStatus
from .model import ArchivedEmployee, CompensationUpdate, Employee


class EmployeeRepository(Protocol):
    def get_employee(self, employee_id: str) -> Optional[Employee]:
        """Return the employee regardless of status, or None."""

        raise NotImplementedError

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        raise NotImplementedError

    def update_compensation(self, *, employee_id: str, update: CompensationUpdate) -> bool:
        raise NotImplementedError

    def update_deductions(
        self,
        *,
        employee_ids: Sequence[str],
        sss_deduction: Decimal,
        philhealth_deduction: Decimal,
        pagibig_deduction: Decimal,
    ) -> int:
        raise NotImplementedError

    def archive(self, *, employee: Employee) -> bool:
        """Insert the archive snapshot and flip the status flag in one transaction."""

        raise NotImplementedError

    def restore(self, *, employee_id: str) -> bool:
        raise NotImplementedError

    def get_archive_entry(self, employee_id: str) -> Optional[ArchivedEmployee]:
        raise NotImplementedError

    def list_archived(self) -> Sequence[ArchivedEmployee]:
        raise NotImplementedError
