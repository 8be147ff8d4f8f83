from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import PayslipStatus, PeriodType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Payslip
from .repository import PayslipRepository

_COLUMNS = """
    payslip_id, employee_id, period_start, period_end, period_type,
    days_worked, leave_days, payable_days, daily_rate, gross_pay,
    sss, philhealth, pagibig, statutory_deductions, late_deduction,
    total_deductions, net_pay, worked_hours, payable_hours, late_minutes,
    status, created_at, updated_at
"""

_WRITE_COLUMNS = (
    "employee_id",
    "period_start",
    "period_end",
    "period_type",
    "days_worked",
    "leave_days",
    "payable_days",
    "daily_rate",
    "gross_pay",
    "sss",
    "philhealth",
    "pagibig",
    "statutory_deductions",
    "late_deduction",
    "total_deductions",
    "net_pay",
    "worked_hours",
    "payable_hours",
    "late_minutes",
    "status",
)


def _to_payslip(r: dict) -> Payslip:
    return Payslip(
        payslip_id=int(r["payslip_id"]),
        employee_id=str(r["employee_id"]),
        period_start=r["period_start"],
        period_end=r["period_end"],
        period_type=PeriodType(r["period_type"]),
        days_worked=int(r["days_worked"]),
        leave_days=int(r["leave_days"]),
        payable_days=int(r["payable_days"]),
        daily_rate=as_decimal(r["daily_rate"]),
        gross_pay=as_decimal(r["gross_pay"]),
        sss=as_decimal(r["sss"]),
        philhealth=as_decimal(r["philhealth"]),
        pagibig=as_decimal(r["pagibig"]),
        statutory_deductions=as_decimal(r["statutory_deductions"]),
        late_deduction=as_decimal(r["late_deduction"]),
        total_deductions=as_decimal(r["total_deductions"]),
        net_pay=as_decimal(r["net_pay"]),
        worked_hours=as_decimal(r["worked_hours"]),
        payable_hours=as_decimal(r["payable_hours"]),
        late_minutes=int(r["late_minutes"]),
        status=PayslipStatus(r["status"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _write_values(p: Payslip) -> tuple:
    return (
        p.employee_id,
        p.period_start,
        p.period_end,
        p.period_type.value,
        int(p.days_worked),
        int(p.leave_days),
        int(p.payable_days),
        p.daily_rate,
        p.gross_pay,
        p.sss,
        p.philhealth,
        p.pagibig,
        p.statutory_deductions,
        p.late_deduction,
        p.total_deductions,
        p.net_pay,
        p.worked_hours,
        p.payable_hours,
        int(p.late_minutes),
        p.status.value,
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_payslip(self, employee_id: str, period_start: date) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payslips WHERE employee_id=%s AND period_start=%s",
                (str(employee_id), period_start),
            )
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def get_by_id(self, payslip_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payslip_id=%s", (int(payslip_id),))
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def upsert_payslip(self, payslip: Payslip) -> Optional[Payslip]:
        placeholders = ",".join(["%s"] * len(_WRITE_COLUMNS))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _WRITE_COLUMNS[2:])

        with db_cursor(self._conn_factory) as (_, cur):
            # Row lock (gap lock when absent) held until commit.
            cur.execute(
                "SELECT status FROM payslips WHERE employee_id=%s AND period_start=%s FOR UPDATE",
                (payslip.employee_id, payslip.period_start),
            )
            current = fetchone(cur)
            if current and current["status"] == PayslipStatus.APPROVED.value:
                return None

            cur.execute(
                f"""
                INSERT INTO payslips({", ".join(_WRITE_COLUMNS)})
                VALUES({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                _write_values(payslip),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM payslips WHERE employee_id=%s AND period_start=%s",
                (payslip.employee_id, payslip.period_start),
            )
            return _to_payslip(fetchone(cur))

    def set_status(
        self,
        payslip_id: int,
        status: PayslipStatus,
        *,
        from_statuses: Sequence[PayslipStatus],
    ) -> Optional[Payslip]:
        allowed = [s.value for s in from_statuses]
        if not allowed:
            return None
        placeholders = ",".join(["%s"] * len(allowed))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE payslips SET status=%s WHERE payslip_id=%s AND status IN ({placeholders})",
                (status.value, int(payslip_id), *allowed),
            )
            if cur.rowcount == 0:
                return None
            cur.execute(f"SELECT {_COLUMNS} FROM payslips WHERE payslip_id=%s", (int(payslip_id),))
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def list_payslips(
        self,
        *,
        employee_id: Optional[str] = None,
        status: Optional[PayslipStatus] = None,
        period_start: Optional[date] = None,
        start_from: Optional[date] = None,
        start_to: Optional[date] = None,
        limit: int = 500,
    ) -> Sequence[Payslip]:
        clauses = ["1=1"]
        params: list[object] = []

        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(str(employee_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if period_start is not None:
            clauses.append("period_start=%s")
            params.append(period_start)
        if start_from is not None:
            clauses.append("period_start>=%s")
            params.append(start_from)
        if start_to is not None:
            clauses.append("period_start<=%s")
            params.append(start_to)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payslips
                WHERE {where}
                ORDER BY period_start DESC, employee_id ASC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_payslip(r) for r in fetchall(cur)]
