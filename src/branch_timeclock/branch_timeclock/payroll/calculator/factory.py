from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import PaymentType
from ...core.exceptions import ValidationError
from ...employees.model import Employee
from .base import BasePayCalculator
from .daily_calculator import DailyRateCalculator
from .weekly_calculator import WeeklyRateCalculator


@dataclass
class BasePayCalculatorFactory:
    """Factory Pattern: choose the base pay rule from the employee's payment type."""

    def for_employee(self, employee: Employee) -> BasePayCalculator:
        if employee.payment_type == PaymentType.DAILY:
            return DailyRateCalculator()
        if employee.payment_type == PaymentType.WEEKLY:
            return WeeklyRateCalculator()
        raise ValidationError(f"Unsupported payment type: {employee.payment_type!r}", field="payment_type")
