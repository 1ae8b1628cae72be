from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import PaymentType


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee paid per calendar day or per week.

    Employees are never hard-deleted; ``is_active=False`` keeps past payroll intact.
    """

    employee_id: int
    branch_id: int
    name: str
    payment_type: PaymentType
    base_salary: Decimal
    position: str = ""
    is_active: bool = True
