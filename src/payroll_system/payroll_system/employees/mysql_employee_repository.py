from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import ArchivedEmployee, CompensationUpdate, Employee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = """
    employee_id, name, email, username, role, daily_rate, annual_salary,
    sss_deduction, philhealth_deduction, pagibig_deduction, status, created_at
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        role=r["role"],
        daily_rate=as_decimal(r["daily_rate"]),
        annual_salary=as_decimal(r["annual_salary"]),
        sss_deduction=as_decimal(r["sss_deduction"]),
        philhealth_deduction=as_decimal(r["philhealth_deduction"]),
        pagibig_deduction=as_decimal(r["pagibig_deduction"]),
        status=EmployeeStatus(r["status"]),
        email=r.get("email"),
        username=r.get("username"),
        created_at=r.get("created_at"),
    )


def _to_archived(r: dict) -> ArchivedEmployee:
    return ArchivedEmployee(
        employee_id=str(r["employee_id"]),
        name=r["name"],
        role=r["role"],
        salary=as_decimal(r["salary"]),
        archived_at=r["archived_at"],
        email=r.get("email"),
        username=r.get("username"),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s",
                (str(employee_id),),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_by_status(self, status: EmployeeStatus) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                WHERE status=%s
                ORDER BY created_at DESC
                """,
                (status.value,),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def update_compensation(self, *, employee_id: str, update: CompensationUpdate) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, role=%s, daily_rate=%s,
                    sss_deduction=%s, philhealth_deduction=%s, pagibig_deduction=%s
                WHERE employee_id=%s
                """,
                (
                    update.name,
                    update.role,
                    update.daily_rate,
                    update.sss_deduction,
                    update.philhealth_deduction,
                    update.pagibig_deduction,
                    str(employee_id),
                ),
            )
            return cur.rowcount > 0

    def update_deductions(
        self,
        *,
        employee_ids: Sequence[str],
        sss_deduction: Decimal,
        philhealth_deduction: Decimal,
        pagibig_deduction: Decimal,
    ) -> int:
        if not employee_ids:
            return 0
        placeholders = ",".join(["%s"] * len(employee_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE employees
                SET sss_deduction=%s, philhealth_deduction=%s, pagibig_deduction=%s
                WHERE employee_id IN ({placeholders})
                """,
                (sss_deduction, philhealth_deduction, pagibig_deduction, *[str(i) for i in employee_ids]),
            )
            return int(cur.rowcount)

    def archive(self, *, employee: Employee) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET status=%s WHERE employee_id=%s AND status=%s",
                (EmployeeStatus.ARCHIVED.value, employee.employee_id, EmployeeStatus.ACTIVE.value),
            )
            if cur.rowcount == 0:
                return False
            cur.execute(
                """
                INSERT INTO archived_employees(employee_id, name, email, username, role, salary)
                VALUES(%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name), email=VALUES(email), username=VALUES(username),
                    role=VALUES(role), salary=VALUES(salary), archived_at=CURRENT_TIMESTAMP
                """,
                (
                    employee.employee_id,
                    employee.name,
                    employee.email,
                    employee.username,
                    employee.role,
                    employee.daily_rate,
                ),
            )
            return True

    def restore(self, *, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE employees SET status=%s WHERE employee_id=%s AND status=%s",
                (EmployeeStatus.ACTIVE.value, str(employee_id), EmployeeStatus.ARCHIVED.value),
            )
            restored = cur.rowcount > 0
            if restored:
                cur.execute("DELETE FROM archived_employees WHERE employee_id=%s", (str(employee_id),))
            return restored

    def get_archive_entry(self, employee_id: str) -> Optional[ArchivedEmployee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, email, username, role, salary, archived_at
                FROM archived_employees
                WHERE employee_id=%s
                """,
                (str(employee_id),),
            )
            r = fetchone(cur)
            return _to_archived(r) if r else None

    def list_archived(self) -> Sequence[ArchivedEmployee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, email, username, role, salary, archived_at
                FROM archived_employees
                ORDER BY archived_at DESC
                """
            )
            return [_to_archived(r) for r in fetchall(cur)]
