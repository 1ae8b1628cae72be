from __future__ import annotations

from decimal import Decimal

from ...core.enums import PeriodKind
from ...employees.model import Employee
from ..model import PayPeriod
from .base import BasePayCalculator


class WeeklyRateCalculator(BasePayCalculator):
    """Fixed rate per week: one for a weekly period, two for a biweekly one."""

    def base_pay(self, employee: Employee, period: PayPeriod) -> Decimal:
        weeks = 1 if period.kind == PeriodKind.WEEKLY else 2
        return Decimal(employee.base_salary) * weeks
