from __future__ import annotations

import logging
from dataclasses import replace

from ..audit.model import AuditEntry
from ..core.constants import EMPLOYEE_DEACTIVATED_ACTION
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

log = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def deactivate(self, employee_id: int) -> Employee:
        """Soft-delete an employee. Past punches, advances and payroll stay intact."""
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee does not exist", field="employee_id")
        if not employee.is_active:
            raise ValidationError("Employee is already inactive", field="employee_id")

        audit = AuditEntry(
            action=EMPLOYEE_DEACTIVATED_ACTION,
            details={"employee_id": employee.employee_id, "name": employee.name, "branch_id": employee.branch_id},
        )
        if not self._employees.deactivate(employee.employee_id, audit=audit):
            raise ValidationError("Employee is already inactive", field="employee_id")

        log.info("Employee %s (%s) deactivated", employee.employee_id, employee.name)
        return replace(employee, is_active=False)
