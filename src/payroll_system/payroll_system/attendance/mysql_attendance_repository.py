from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, time_in, time_out,
    worked_hours, payable_hours, late_minutes, status
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r["work_date"],
        time_in=r["time_in"],
        time_out=r.get("time_out"),
        worked_hours=as_decimal(r.get("worked_hours")),
        payable_hours=as_decimal(r.get("payable_hours")),
        late_minutes=int(r.get("late_minutes") or 0),
        status=AttendanceStatus(r.get("status") or AttendanceStatus.PRESENT.value),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (str(employee_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_in_range(self, employee_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        return self.list_range(start_date=start_date, end_date=end_date, employee_id=employee_id)

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE {where}
                ORDER BY work_date DESC, time_in DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_recent_for_employee(self, employee_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE employee_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (str(employee_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_time_in(
        self,
        *,
        employee_id: str,
        work_date: date,
        time_in: datetime,
        late_minutes: int,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # No-op update on conflict: the first time_in of the day wins.
            cur.execute(
                """
                INSERT INTO attendance(employee_id, work_date, time_in, late_minutes, status)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE attendance_id=attendance_id
                """,
                (str(employee_id), work_date, time_in, int(late_minutes), AttendanceStatus.PRESENT.value),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance WHERE employee_id=%s AND work_date=%s",
                (str(employee_id), work_date),
            )
            return _to_record(fetchone(cur))

    def update_time_out(
        self,
        *,
        attendance_id: int,
        time_out: datetime,
        worked_hours: Decimal,
        payable_hours: Decimal,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET time_out=%s, worked_hours=%s, payable_hours=%s
                WHERE attendance_id=%s
                """,
                (time_out, worked_hours, payable_hours, int(attendance_id)),
            )
            return cur.rowcount > 0

    def delete_open(self, *, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance WHERE attendance_id=%s AND time_out IS NULL",
                (int(attendance_id),),
            )
            return cur.rowcount > 0
