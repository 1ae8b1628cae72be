from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Any, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_amount, require_date_range
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import SalaryAdvance
from .repository import AdvanceRepository

log = logging.getLogger(__name__)


class AdvanceService:
    def __init__(
        self,
        advances: AdvanceRepository,
        employees: EmployeeRepository,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._advances = advances
        self._employees = employees
        self._tz = tz

    def record_advance(
        self,
        employee_id: int,
        amount: Any,
        reason: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> SalaryAdvance:
        now = now or now_local(self._tz)
        value = require_amount(amount, "amount")

        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee does not exist", field="employee_id")
        if not employee.is_active:
            raise ValidationError("Employee is not active", field="employee_id")

        note = (reason or "").strip()
        advance_id = self._advances.append(
            employee_id=employee.employee_id,
            branch_id=employee.branch_id,
            amount=value,
            reason=note,
            recorded_at=now,
        )
        log.info("Recorded advance of %s for employee %s", value, employee.employee_id)
        return SalaryAdvance(
            advance_id=advance_id,
            employee_id=employee.employee_id,
            branch_id=employee.branch_id,
            amount=value,
            reason=note,
            recorded_at=now,
        )

    def list_advances(
        self,
        *,
        branch_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[SalaryAdvance]:
        """Advances handed out, newest first. Every filter is optional."""
        require_date_range(start, end)
        return self._advances.search(
            start=start,
            end=end,
            branch_id=int(branch_id) if branch_id is not None else None,
        )
