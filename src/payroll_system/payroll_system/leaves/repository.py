from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide_leave(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        admin_comment: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to ``status``; False when it is no longer pending."""

        raise NotImplementedError

    def get_approved_overlapping(self, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError
