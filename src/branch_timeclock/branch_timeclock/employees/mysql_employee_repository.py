from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..audit.model import AuditEntry
from ..audit.mysql_audit import insert_audit
from ..core.enums import PaymentType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, fetchone, to_decimal
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, branch_id, name, position, payment_type, base_salary, is_active"


def _to_employee(row: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(row["employee_id"]),
        branch_id=int(row["branch_id"]),
        name=row["name"],
        position=row.get("position") or "",
        payment_type=PaymentType(row["payment_type"]),
        base_salary=to_decimal(row["base_salary"]),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def list_active_for_branch(self, branch_id: int) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                WHERE branch_id=%s AND is_active=1
                ORDER BY name ASC
                """,
                (int(branch_id),),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def deactivate(self, employee_id: int, *, audit: Optional[AuditEntry] = None) -> bool:
        with db_write(self._conn_factory, what="employee deactivation") as (_, cur):
            cur.execute(
                "UPDATE employees SET is_active=0 WHERE employee_id=%s AND is_active=1",
                (int(employee_id),),
            )
            if cur.rowcount == 0:
                return False
            if audit is not None:
                insert_audit(cur, audit)
            return True
