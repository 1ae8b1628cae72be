from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class SalaryAdvance:
    """Domain entity: cash handed to an employee ahead of payday. Immutable."""

    advance_id: int
    employee_id: int
    branch_id: int
    amount: Decimal
    recorded_at: datetime
    reason: str = ""
