from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import RecordType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import day_bounds, db_cursor, db_write, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(row["record_id"]),
        employee_id=int(row["employee_id"]),
        branch_id=int(row["branch_id"]),
        record_type=RecordType(row["record_type"]),
        recorded_at=row["recorded_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        lower, upper = day_bounds(start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, employee_id, branch_id, record_type, recorded_at
                FROM attendance_records
                WHERE employee_id=%s AND recorded_at >= %s AND recorded_at < %s
                """,
                (int(employee_id), lower, upper),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_last_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        lower, upper = day_bounds(work_date, work_date)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT record_id, employee_id, branch_id, record_type, recorded_at
                FROM attendance_records
                WHERE employee_id=%s AND recorded_at >= %s AND recorded_at < %s
                ORDER BY recorded_at DESC, record_id DESC
                LIMIT 1
                """,
                (int(employee_id), lower, upper),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def append(
        self,
        *,
        employee_id: int,
        branch_id: int,
        record_type: RecordType,
        recorded_at: datetime,
    ) -> int:
        with db_write(self._conn_factory, what="attendance record") as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(employee_id, branch_id, record_type, recorded_at)
                VALUES(%s,%s,%s,%s)
                """,
                (int(employee_id), int(branch_id), record_type.value, recorded_at),
            )
            return int(cur.lastrowid)

    def search(
        self,
        *,
        start: date,
        end: date,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        lower, upper = day_bounds(start, end)
        clauses = ["recorded_at >= %s", "recorded_at < %s"]
        params: list[object] = [lower, upper]
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
                SELECT record_id, employee_id, branch_id, record_type, recorded_at
                FROM attendance_records
                WHERE {where}
                ORDER BY recorded_at DESC, record_id DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
