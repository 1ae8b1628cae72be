from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from ..advances.repository import AdvanceRepository
from ..attendance.repository import AttendanceRepository
from ..common.validators import require_date_range
from ..core.enums import ReportKind
from ..core.exceptions import ValidationError
from ..payroll.repository import PayrollRepository
from .model import Report

log = logging.getLogger(__name__)


class ReportService:
    """Read-only queries over punches, advances and saved payroll.

    Every report needs a closed ``[start, end]`` range; branch and employee
    filters are optional and combine.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        advances: AdvanceRepository,
        payrolls: PayrollRepository,
    ):
        self._attendance = attendance
        self._advances = advances
        self._payrolls = payrolls

    def build(
        self,
        kind: ReportKind,
        start: Optional[date],
        end: Optional[date],
        *,
        branch_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Report:
        try:
            kind = ReportKind(kind)
        except ValueError:
            raise ValidationError("Report must be attendance, advances or payroll", field="kind")
        if start is None:
            raise ValidationError("start is required", field="start")
        if end is None:
            raise ValidationError("end is required", field="end")
        require_date_range(start, end)

        filters = {
            "branch_id": int(branch_id) if branch_id is not None else None,
            "employee_id": int(employee_id) if employee_id is not None else None,
        }
        total = None
        if kind == ReportKind.ATTENDANCE:
            rows = self._attendance.search(start=start, end=end, **filters)
        elif kind == ReportKind.ADVANCES:
            rows = self._advances.search(start=start, end=end, **filters)
            total = sum((a.amount for a in rows), Decimal("0"))
        else:
            rows = self._payrolls.search(start=start, end=end, **filters)
            total = sum((p.total_to_pay for p in rows), Decimal("0"))

        log.debug("Report %s %s..%s %s: %d rows", kind.value, start, end, filters, len(rows))
        return Report(kind=kind, start=start, end=end, rows=list(rows), total=total, **filters)
