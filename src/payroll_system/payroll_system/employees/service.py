from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Sequence

from ..common.money import money
from ..common.validators import require_decimal, require_in_range, require_non_empty
from ..core.constants import DEFAULT_DEDUCTION_MAX, DEFAULT_DEDUCTION_MIN
from ..core.enums import EmployeeStatus
from ..core.exceptions import NotFoundError, StateConflictError, ValidationError
from .model import ArchivedEmployee, CompensationUpdate, Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeductionBounds:
    minimum: Decimal = DEFAULT_DEDUCTION_MIN
    maximum: Decimal = DEFAULT_DEDUCTION_MAX


class EmployeeService:
    def __init__(self, employees: EmployeeRepository, *, bounds: DeductionBounds | None = None):
        self._employees = employees
        self._bounds = bounds or DeductionBounds()

    def get(self, employee_id: str) -> Employee:
        emp = self._employees.get_employee(str(employee_id))
        if not emp:
            raise NotFoundError(f"Employee {employee_id} not found")
        return emp

    def list_active(self) -> Sequence[Employee]:
        return self._employees.list_by_status(EmployeeStatus.ACTIVE)

    def list_archived(self) -> Sequence[ArchivedEmployee]:
        return self._employees.list_archived()

    def _deduction(self, value: Any, field_name: str) -> Decimal:
        amount = require_decimal(value, field_name)
        return money(require_in_range(amount, field_name, self._bounds.minimum, self._bounds.maximum))

    def validate_compensation(
        self,
        *,
        name: str,
        role: str,
        daily_rate: Any,
        sss_deduction: Any,
        philhealth_deduction: Any,
        pagibig_deduction: Any,
    ) -> CompensationUpdate:
        rate = require_decimal(daily_rate, "daily_rate")
        if rate < 0:
            raise ValidationError("daily_rate must not be negative", field="daily_rate")

        return CompensationUpdate(
            name=require_non_empty(name, "name"),
            role=require_non_empty(role, "role"),
            daily_rate=money(rate),
            sss_deduction=self._deduction(sss_deduction, "sss_deduction"),
            philhealth_deduction=self._deduction(philhealth_deduction, "philhealth_deduction"),
            pagibig_deduction=self._deduction(pagibig_deduction, "pagibig_deduction"),
        )

    def update_compensation(self, employee_id: str, **fields: Any) -> Employee:
        self.get(employee_id)
        update = self.validate_compensation(**fields)
        self._employees.update_compensation(employee_id=str(employee_id), update=update)
        logger.info("updated compensation for employee %s (daily_rate=%s)", employee_id, update.daily_rate)
        return self.get(employee_id)

    def bulk_update_deductions(
        self,
        employee_ids: Sequence[str],
        *,
        sss_deduction: Any,
        philhealth_deduction: Any,
        pagibig_deduction: Any,
    ) -> int:
        ids = [str(i) for i in employee_ids if str(i).strip()]
        if not ids:
            raise ValidationError("Select at least one employee", field="employee_ids")

        updated = self._employees.update_deductions(
            employee_ids=ids,
            sss_deduction=self._deduction(sss_deduction, "sss_deduction"),
            philhealth_deduction=self._deduction(philhealth_deduction, "philhealth_deduction"),
            pagibig_deduction=self._deduction(pagibig_deduction, "pagibig_deduction"),
        )
        logger.info("bulk deduction update touched %d of %d employees", updated, len(ids))
        return updated

    def archive(self, employee_id: str) -> None:
        emp = self.get(employee_id)
        if emp.is_archived:
            raise StateConflictError(f"Employee {employee_id} is already archived")
        if not self._employees.archive(employee=emp):
            raise StateConflictError(f"Employee {employee_id} could not be archived")
        logger.info("archived employee %s", employee_id)

    def restore(self, employee_id: str) -> None:
        emp = self.get(employee_id)
        if not emp.is_archived:
            raise StateConflictError(f"Employee {employee_id} is not archived")
        if not self._employees.restore(employee_id=emp.employee_id):
            raise StateConflictError(f"Employee {employee_id} could not be restored")
        logger.info("restored employee %s", employee_id)
