from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..audit.model import AuditEntry
from ..audit.mysql_audit import insert_audit
from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, db_write, fetchall, fetchone, to_decimal
from .model import Payroll
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, employee_id, branch_id, period_start, period_end, base_salary, days_worked,
    total_advances, manual_deductions, deduction_reason, total_to_pay, status, generated_by, created_at
"""


def _to_payroll(row: Dict[str, Any]) -> Payroll:
    return Payroll(
        payroll_id=int(row["payroll_id"]),
        employee_id=int(row["employee_id"]),
        branch_id=int(row["branch_id"]),
        period_start=row["period_start"],
        period_end=row["period_end"],
        base_salary=to_decimal(row["base_salary"]),
        days_worked=int(row["days_worked"]),
        total_advances=to_decimal(row["total_advances"]),
        manual_deductions=to_decimal(row["manual_deductions"]),
        deduction_reason=row.get("deduction_reason") or "",
        total_to_pay=to_decimal(row["total_to_pay"]),
        status=PayrollStatus(row["status"]),
        generated_by=row["generated_by"],
        created_at=row.get("created_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_batch(self, rows: Sequence[Payroll], *, audit: Optional[AuditEntry] = None) -> list[int]:
        ids: list[int] = []
        with db_write(self._conn_factory, what="payroll batch") as (_, cur):
            for p in rows:
                cur.execute(
                    """
                    INSERT INTO payroll(
                        employee_id, branch_id, period_start, period_end, base_salary, days_worked,
                        total_advances, manual_deductions, deduction_reason, total_to_pay, status, generated_by
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        p.employee_id,
                        p.branch_id,
                        p.period_start,
                        p.period_end,
                        p.base_salary,
                        p.days_worked,
                        p.total_advances,
                        p.manual_deductions,
                        p.deduction_reason,
                        p.total_to_pay,
                        p.status.value,
                        p.generated_by,
                    ),
                )
                ids.append(int(cur.lastrowid))

            if audit is not None:
                insert_audit(cur, audit)
        return ids

    def get_by_id(self, payroll_id: int) -> Optional[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payroll WHERE payroll_id=%s", (int(payroll_id),))
            row = fetchone(cur)
            return _to_payroll(row) if row else None

    def update_status(self, payroll_id: int, *, current: PayrollStatus, target: PayrollStatus) -> bool:
        with db_write(self._conn_factory, what="payroll status") as (_, cur):
            cur.execute(
                "UPDATE payroll SET status=%s WHERE payroll_id=%s AND status=%s",
                (target.value, int(payroll_id), current.value),
            )
            return cur.rowcount > 0

    def list_for_employee(self, employee_id: int, *, limit: int = 50) -> Sequence[Payroll]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll
                WHERE employee_id=%s
                ORDER BY period_start DESC, payroll_id DESC
                LIMIT %s
                """,
                (int(employee_id), int(limit)),
            )
            return [_to_payroll(r) for r in fetchall(cur)]

    def search(
        self,
        *,
        start: date,
        end: date,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[Payroll]:
        clauses = ["period_start >= %s", "period_end <= %s"]
        params: list[object] = [start, end]
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(int(branch_id))
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payroll
                WHERE {where}
                ORDER BY created_at DESC, payroll_id DESC
                """,
                tuple(params),
            )
            return [_to_payroll(r) for r in fetchall(cur)]
