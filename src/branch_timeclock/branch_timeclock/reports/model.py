from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..core.enums import ReportKind


@dataclass(frozen=True)
class Report:
    """Rows of one report query, newest first.

    ``total`` sums the money column (advances, payroll); attendance reports have none.
    """

    kind: ReportKind
    start: date
    end: date
    rows: Sequence[Any]
    branch_id: Optional[int] = None
    employee_id: Optional[int] = None
    total: Optional[Decimal] = None
