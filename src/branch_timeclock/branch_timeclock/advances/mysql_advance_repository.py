from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import day_bounds, db_cursor, db_write, fetchall, to_decimal
from .model import SalaryAdvance
from .repository import AdvanceRepository

_COLUMNS = "advance_id, employee_id, branch_id, amount, reason, recorded_at"


def _to_advance(row: Dict[str, Any]) -> SalaryAdvance:
    return SalaryAdvance(
        advance_id=int(row["advance_id"]),
        employee_id=int(row["employee_id"]),
        branch_id=int(row["branch_id"]),
        amount=to_decimal(row["amount"]),
        reason=row.get("reason") or "",
        recorded_at=row["recorded_at"],
    )


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[SalaryAdvance]:
        lower, upper = day_bounds(start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_advances
                WHERE employee_id=%s AND recorded_at >= %s AND recorded_at < %s
                ORDER BY recorded_at ASC, advance_id ASC
                """,
                (int(employee_id), lower, upper),
            )
            return [_to_advance(r) for r in fetchall(cur)]

    def search(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryAdvance]:
        clauses: list[str] = []
        params: list[object] = []
        if start is not None:
            clauses.append("recorded_at >= %s")
            params.append(datetime.combine(start, time.min))
        if end is not None:
            clauses.append("recorded_at < %s")
            params.append(datetime.combine(end + timedelta(days=1), time.min))
        if branch_id is not None:
            clauses.append("branch_id=%s")
            params.append(int(branch_id))
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(employee_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_advances
                {where}
                ORDER BY recorded_at DESC, advance_id DESC
                """,
                tuple(params),
            )
            return [_to_advance(r) for r in fetchall(cur)]

    def append(
        self,
        *,
        employee_id: int,
        branch_id: int,
        amount: Decimal,
        reason: str,
        recorded_at: datetime,
    ) -> int:
        with db_write(self._conn_factory, what="salary advance") as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_advances(employee_id, branch_id, amount, reason, recorded_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(employee_id), int(branch_id), amount, reason, recorded_at),
            )
            return int(cur.lastrowid)
