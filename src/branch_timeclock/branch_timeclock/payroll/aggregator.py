from __future__ import annotations

from datetime import tzinfo
from decimal import Decimal
from typing import Iterable, Optional

from ..advances.model import SalaryAdvance
from ..attendance.anomalies import incomplete_shifts, sequence_anomalies
from ..attendance.days import absences, sort_records, worked_days
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import local_day
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from .calculator.factory import BasePayCalculatorFactory
from .model import PayPeriod, PayrollCalculation


def total_advances(
    advances: Iterable[SalaryAdvance],
    period: PayPeriod,
    *,
    tz: Optional[tzinfo] = None,
) -> Decimal:
    return sum(
        (Decimal(a.amount) for a in advances if period.contains(local_day(a.recorded_at, tz))),
        Decimal("0"),
    )


def compute_payroll(
    employee: Employee,
    records: Iterable[AttendanceRecord],
    advances: Iterable[SalaryAdvance],
    period: PayPeriod,
    *,
    calculators: Optional[BasePayCalculatorFactory] = None,
    tz: Optional[tzinfo] = None,
) -> PayrollCalculation:
    """Aggregate one employee's punches and advances over ``period``.

    The period is used as given; callers resolve its end date. Anomalies and
    absences are attached for review and never change the amounts.
    """
    if employee is None:
        raise ValidationError("Employee is required", field="employee_id")
    if period is None or period.start is None or period.end is None:
        raise ValidationError("Period bounds are required", field="period")

    calculators = calculators or BasePayCalculatorFactory()
    base = calculators.for_employee(employee).base_pay(employee, period)

    in_period = [r for r in sort_records(records) if period.contains(local_day(r.recorded_at, tz))]

    return PayrollCalculation(
        employee=employee,
        period=period,
        base_salary=base,
        days_worked=len(worked_days(in_period, period.start, period.end, tz=tz)),
        total_advances=total_advances(advances, period, tz=tz),
        absences=tuple(absences(in_period, period.start, period.end, tz=tz)),
        incomplete_shifts=tuple(incomplete_shifts(in_period, tz=tz)),
        sequence_anomalies=tuple(sequence_anomalies(in_period, tz=tz)),
    )
