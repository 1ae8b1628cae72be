from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional, Union

from ..common.datetime_utils import local_day, now_local
from ..core.enums import RecordType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, PunchOptions
from .repository import AttendanceRepository
from .sequencer import allowed_next_types, next_punch_type

log = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._tz = tz

    def _require_active_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee does not exist", field="employee_id")
        if not employee.is_active:
            raise ValidationError("Employee is not active", field="employee_id")
        return employee

    def punch_options(self, employee_id: int, *, now: Optional[datetime] = None) -> PunchOptions:
        now = now or now_local(self._tz)
        today = local_day(now, self._tz)

        employee = self._require_active_employee(employee_id)
        last = self._attendance.get_last_for_day(employee.employee_id, today)
        if last is not None and last.record_type == RecordType.UNKNOWN:
            log.warning(
                "Employee %s last punch %s has an unrecognized type; cycle restarts at entry",
                employee.employee_id,
                last.record_id,
            )

        return PunchOptions(
            employee_id=employee.employee_id,
            last_record=last,
            default_type=next_punch_type(last, today=today, tz=self._tz),
            choices=allowed_next_types(last, today=today, tz=self._tz),
        )

    def append_punch(
        self,
        employee_id: int,
        chosen_type: Union[RecordType, str, None] = None,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Label and append a punch.

        Without ``chosen_type`` the default next type is used. A chosen type must
        be one of the currently legal next types, so invalid transitions never
        reach the store.
        """
        now = now or now_local(self._tz)
        employee = self._require_active_employee(employee_id)
        options = self.punch_options(employee.employee_id, now=now)

        if chosen_type is None:
            record_type = options.default_type
        else:
            record_type = RecordType(chosen_type)
        if record_type not in options.choices:
            # Echo what the caller sent; unrecognized strings load as UNKNOWN.
            requested = chosen_type.value if isinstance(chosen_type, RecordType) else chosen_type
            allowed = ", ".join(t.value for t in options.choices)
            raise ValidationError(
                f"Punch '{requested}' is not allowed now (expected: {allowed})",
                field="record_type",
            )

        record_id = self._attendance.append(
            employee_id=employee.employee_id,
            branch_id=employee.branch_id,
            record_type=record_type,
            recorded_at=now,
        )
        log.info("Recorded %s for employee %s at %s", record_type.value, employee.employee_id, now.isoformat())
        return AttendanceRecord(
            record_id=record_id,
            employee_id=employee.employee_id,
            branch_id=employee.branch_id,
            record_type=record_type,
            recorded_at=now,
        )
