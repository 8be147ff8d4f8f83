from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import LeaveStatus, LeaveType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, StateConflictError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    @staticmethod
    def _parse_type(value: str | LeaveType) -> LeaveType:
        if isinstance(value, LeaveType):
            return value
        v = (value or "").strip()
        for t in LeaveType:
            if v.lower() in {t.value.lower(), t.name.lower()}:
                return t
        raise ValidationError(f"Unknown leave type: {value!r}", field="leave_type")

    def _get(self, leave_id: int) -> LeaveRequest:
        req = self._leaves.get_leave(int(leave_id))
        if not req:
            raise NotFoundError(f"Leave request {leave_id} not found")
        return req

    def submit(
        self,
        *,
        current_role: Role,
        employee_id: str,
        leave_type: str | LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can file leave requests")

        if end_date < start_date:
            raise ValidationError("End date must be on or after start date", field="end_date")

        kind = self._parse_type(leave_type)
        reason = require_non_empty(reason, "reason")

        emp = self._employees.get_employee(str(employee_id))
        if not emp:
            raise NotFoundError(f"Employee {employee_id} not found")
        if emp.is_archived:
            raise ValidationError("Archived employees cannot file leave requests", field="employee_id")

        leave_id = self._leaves.create_leave(
            employee_id=str(employee_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        logger.info("leave %s filed: employee=%s %s..%s (%s)", leave_id, employee_id, start_date, end_date, kind.value)
        return leave_id

    def _decide(self, leave_id: int, status: LeaveStatus, admin_comment: Optional[str] = None) -> None:
        req = self._get(leave_id)
        if req.status != LeaveStatus.PENDING:
            raise StateConflictError(f"Leave request is already {req.status.value}")

        ok = self._leaves.decide_leave(leave_id=int(leave_id), status=status, admin_comment=admin_comment)
        if not ok:
            raise StateConflictError("Leave request was already decided")
        logger.info("leave %s -> %s", leave_id, status.value)

    def approve(self, *, current_role: Role, leave_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can approve leave")
        self._decide(leave_id, LeaveStatus.APPROVED)

    def reject(self, *, current_role: Role, leave_id: int, admin_comment: str = "") -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can reject leave")
        self._decide(leave_id, LeaveStatus.REJECTED, (admin_comment or "").strip() or None)

    def cancel(self, *, current_role: Role, employee_id: str, leave_id: int) -> None:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only the requesting employee can cancel leave")

        req = self._get(leave_id)
        if req.employee_id != str(employee_id):
            raise AuthorizationError("You can only cancel your own leave requests")
        self._decide(leave_id, LeaveStatus.CANCELLED)

    def list_requests(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[LeaveStatus] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        return self._leaves.list_leave_requests(status=status, employee_id=employee_id, limit=limit)

    def pending_count(self) -> int:
        return self._leaves.count_by_status(LeaveStatus.PENDING)
