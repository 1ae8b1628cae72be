from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from ..attendance.anomalies import absence_anomalies
from ..attendance.days import days_in_period
from ..attendance.model import Anomaly
from ..common.validators import require_amount
from ..core.enums import PayrollStatus, PeriodKind
from ..employees.model import Employee


@dataclass(frozen=True)
class PayPeriod:
    """Closed date range ``[start, end]`` a payroll covers."""

    start: date
    end: date
    kind: PeriodKind = PeriodKind.WEEKLY

    @property
    def days(self) -> int:
        return days_in_period(self.start, self.end)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class PayrollCalculation:
    """Result of aggregating one employee over one period.

    ``total_to_pay`` is always derived from the other amounts, so changing the
    manual deduction any number of times never drifts.
    """

    employee: Employee
    period: PayPeriod
    base_salary: Decimal
    days_worked: int
    total_advances: Decimal
    absences: tuple[date, ...] = ()
    incomplete_shifts: tuple[Anomaly, ...] = ()
    sequence_anomalies: tuple[Anomaly, ...] = ()
    manual_deductions: Decimal = Decimal("0")
    deduction_reason: str = ""

    @property
    def total_to_pay(self) -> Decimal:
        return self.base_salary - self.total_advances - self.manual_deductions

    @property
    def anomalies(self) -> tuple[Anomaly, ...]:
        """Every advisory finding for review, ordered by day."""
        found = [*absence_anomalies(self.absences), *self.incomplete_shifts, *self.sequence_anomalies]
        return tuple(sorted(found, key=lambda a: a.work_date))

    @property
    def has_warnings(self) -> bool:
        return bool(self.anomalies)

    def with_deduction(self, amount: Any, reason: Optional[str] = None) -> "PayrollCalculation":
        value = require_amount(amount, "manual_deduction", allow_zero=True)
        return replace(self, manual_deductions=value, deduction_reason=(reason or "").strip())

    def to_payroll(self, *, generated_by: str, status: PayrollStatus = PayrollStatus.CONFIRMED) -> "Payroll":
        return Payroll(
            employee_id=self.employee.employee_id,
            branch_id=self.employee.branch_id,
            period_start=self.period.start,
            period_end=self.period.end,
            base_salary=self.base_salary,
            days_worked=self.days_worked,
            total_advances=self.total_advances,
            manual_deductions=self.manual_deductions,
            deduction_reason=self.deduction_reason,
            total_to_pay=self.total_to_pay,
            status=status,
            generated_by=generated_by,
        )

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee.employee_id,
            "employee_name": self.employee.name,
            "payment_type": self.employee.payment_type.value,
            "period_start": self.period.start.isoformat(),
            "period_end": self.period.end.isoformat(),
            "period_kind": self.period.kind.value,
            "base_salary": str(self.base_salary),
            "days_worked": self.days_worked,
            "total_advances": str(self.total_advances),
            "manual_deductions": str(self.manual_deductions),
            "deduction_reason": self.deduction_reason,
            "total_to_pay": str(self.total_to_pay),
            "absences": [d.isoformat() for d in self.absences],
            "incomplete_shifts": [a.to_dict() for a in self.incomplete_shifts],
            "sequence_anomalies": [a.to_dict() for a in self.sequence_anomalies],
            "anomalies": [a.to_dict() for a in self.anomalies],
        }


@dataclass(frozen=True)
class Payroll:
    """Persisted payroll snapshot. Rows are never regenerated in place."""

    employee_id: int
    branch_id: int
    period_start: date
    period_end: date
    base_salary: Decimal
    days_worked: int
    total_advances: Decimal
    manual_deductions: Decimal
    deduction_reason: str
    total_to_pay: Decimal
    status: PayrollStatus
    generated_by: str
    payroll_id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "payroll_id": self.payroll_id,
            "employee_id": self.employee_id,
            "branch_id": self.branch_id,
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "base_salary": str(self.base_salary),
            "days_worked": self.days_worked,
            "total_advances": str(self.total_advances),
            "manual_deductions": str(self.manual_deductions),
            "deduction_reason": self.deduction_reason,
            "total_to_pay": str(self.total_to_pay),
            "status": self.status.value,
            "generated_by": self.generated_by,
        }


@dataclass(frozen=True)
class EmployeeFailure:
    employee_id: int
    employee_name: str
    message: str
    field: Optional[str] = None


@dataclass
class BranchPayrollRun:
    """Per-employee outcome of a branch calculation: bad data fails one employee, not the run."""

    branch_id: int
    period: PayPeriod
    calculations: list[PayrollCalculation] = field(default_factory=list)
    failures: list[EmployeeFailure] = field(default_factory=list)

    @property
    def total_to_pay(self) -> Decimal:
        return sum((c.total_to_pay for c in self.calculations), Decimal("0"))
