from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, employee_id, leave_type, start_date, end_date,
    reason, status, admin_comment, created_at
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        employee_id=str(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        admin_comment=r.get("admin_comment"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        employee_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    str(employee_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get_leave(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_leave_requests(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        employee_id: Optional[str] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_leave(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        admin_comment: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, admin_comment=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, admin_comment, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def get_approved_overlapping(self, employee_id: str, start_date: date, end_date: date) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND status=%s AND start_date<=%s AND end_date>=%s
                ORDER BY start_date
                """,
                (str(employee_id), LeaveStatus.APPROVED.value, end_date, start_date),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM leave_requests WHERE status=%s", (status.value,))
            r = fetchone(cur)
            return int(r["n"]) if r else 0
