from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any, Optional, Sequence

from ..advances.repository import AdvanceRepository
from ..attendance.repository import AttendanceRepository
from ..audit.model import AuditEntry
from ..branches.repository import BranchRepository
from ..core.constants import DEFAULT_GENERATED_BY, PAYROLL_CONFIRMED_ACTION
from ..core.enums import PayrollStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .aggregator import compute_payroll
from .calculator.factory import BasePayCalculatorFactory
from .model import BranchPayrollRun, EmployeeFailure, PayPeriod, Payroll, PayrollCalculation
from .repository import PayrollRepository

log = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        employees: EmployeeRepository,
        branches: BranchRepository,
        attendance: AttendanceRepository,
        advances: AdvanceRepository,
        payrolls: PayrollRepository,
        *,
        calculators: Optional[BasePayCalculatorFactory] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._employees = employees
        self._branches = branches
        self._attendance = attendance
        self._advances = advances
        self._payrolls = payrolls
        self._calculators = calculators or BasePayCalculatorFactory()
        self._tz = tz

    def _calculate(self, employee: Employee, period: PayPeriod) -> PayrollCalculation:
        records = self._attendance.list_for_employee(employee.employee_id, start=period.start, end=period.end)
        advances = self._advances.list_for_employee(employee.employee_id, start=period.start, end=period.end)
        return compute_payroll(employee, records, advances, period, calculators=self._calculators, tz=self._tz)

    def calculate_employee(self, employee_id: int, period: PayPeriod) -> PayrollCalculation:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee does not exist", field="employee_id")
        return self._calculate(employee, period)

    def calculate_branch(self, branch_id: int, period: PayPeriod) -> BranchPayrollRun:
        """Calculate every active employee of a branch.

        A ValidationError for one employee is recorded as a failure and the
        run continues with the others.
        """
        if not self._branches.get_by_id(int(branch_id)):
            raise NotFoundError("Branch does not exist", field="branch_id")

        run = BranchPayrollRun(branch_id=int(branch_id), period=period)
        for employee in self._employees.list_active_for_branch(int(branch_id)):
            try:
                run.calculations.append(self._calculate(employee, period))
            except ValidationError as e:
                log.warning("Skipping employee %s in branch %s payroll: %s", employee.employee_id, branch_id, e)
                run.failures.append(
                    EmployeeFailure(
                        employee_id=employee.employee_id,
                        employee_name=employee.name,
                        message=str(e),
                        field=e.field,
                    )
                )

        log.info(
            "Branch %s payroll %s..%s: %d calculated, %d failed",
            branch_id,
            period.start,
            period.end,
            len(run.calculations),
            len(run.failures),
        )
        return run

    def apply_deduction(self, calculation: PayrollCalculation, amount: Any, reason: Optional[str] = None) -> PayrollCalculation:
        return calculation.with_deduction(amount, reason)

    def confirm(
        self,
        calculations: Sequence[PayrollCalculation],
        *,
        generated_by: str = DEFAULT_GENERATED_BY,
    ) -> list[int]:
        """Persist a batch as confirmed payroll rows, all or nothing.

        A WriteError from the store propagates unchanged and means no row was saved.
        """
        if not calculations:
            raise ValidationError("Nothing to confirm", field="calculations")

        rows = [c.to_payroll(generated_by=generated_by) for c in calculations]
        periods = {(c.period.start, c.period.end) for c in calculations}
        audit = AuditEntry(
            action=PAYROLL_CONFIRMED_ACTION,
            details={
                "branch_ids": sorted({r.branch_id for r in rows}),
                "periods": [{"start": s.isoformat(), "end": e.isoformat()} for s, e in sorted(periods)],
                "employees": len(rows),
                "total_to_pay": str(sum(r.total_to_pay for r in rows)),
                "generated_by": generated_by,
            },
        )

        ids = self._payrolls.insert_batch(rows, audit=audit)
        log.info("Confirmed payroll batch of %d employees by %s", len(ids), generated_by)
        return ids

    def mark_paid(self, payroll_id: int) -> Payroll:
        payroll = self._payrolls.get_by_id(int(payroll_id))
        if not payroll:
            raise NotFoundError("Payroll does not exist", field="payroll_id")
        if not payroll.status.can_transition_to(PayrollStatus.PAID):
            raise ValidationError(
                f"Payroll in status '{payroll.status.value}' cannot be marked paid",
                field="status",
            )
        if not self._payrolls.update_status(payroll.payroll_id, current=payroll.status, target=PayrollStatus.PAID):
            raise ValidationError("Payroll status changed concurrently", field="status")

        log.info("Payroll %s marked paid", payroll.payroll_id)
        return self._payrolls.get_by_id(payroll.payroll_id)

    def history(self, employee_id: int, *, limit: int = 50) -> Sequence[Payroll]:
        return self._payrolls.list_for_employee(int(employee_id), limit=limit)
