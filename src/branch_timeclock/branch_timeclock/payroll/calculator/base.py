from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...employees.model import Employee
from ..model import PayPeriod


class BasePayCalculator(ABC):
    """Calculator interface (Strategy Pattern for base pay)."""

    @abstractmethod
    def base_pay(self, employee: Employee, period: PayPeriod) -> Decimal:
        raise NotImplementedError
