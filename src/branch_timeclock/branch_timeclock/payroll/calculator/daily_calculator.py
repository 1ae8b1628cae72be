from __future__ import annotations

from decimal import Decimal

from ...employees.model import Employee
from ..model import PayPeriod
from .base import BasePayCalculator


class DailyRateCalculator(BasePayCalculator):
    """Rate times every calendar day of the period.

    Absences are not subtracted here: they are reported so an admin can apply
    a manual deduction with a reason.
    """

    def base_pay(self, employee: Employee, period: PayPeriod) -> Decimal:
        return Decimal(employee.base_salary) * period.days
