from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RecordType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Punches whose timestamp falls on any day of ``[start, end]``. Order is not guaranteed."""

        raise NotImplementedError

    def get_last_for_day(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def append(
        self,
        *,
        employee_id: int,
        branch_id: int,
        record_type: RecordType,
        recorded_at: datetime,
    ) -> int:
        raise NotImplementedError

    def search(
        self,
        *,
        start: date,
        end: date,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceRecord]:
        """Punches on ``[start, end]``, optionally narrowed to a branch/employee. Newest first."""

        raise NotImplementedError
