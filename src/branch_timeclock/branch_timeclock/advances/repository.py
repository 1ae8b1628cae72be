from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import SalaryAdvance


class AdvanceRepository(Protocol):
    def list_for_employee(self, employee_id: int, *, start: date, end: date) -> Sequence[SalaryAdvance]:
        raise NotImplementedError

    def search(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[SalaryAdvance]:
        """Advances matching every given filter, newest first. Open bounds are unbounded."""

        raise NotImplementedError

    def append(
        self,
        *,
        employee_id: int,
        branch_id: int,
        amount: Decimal,
        reason: str,
        recorded_at: datetime,
    ) -> int:
        raise NotImplementedError
