from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_amount(value: Any, field_name: str, *, allow_zero: bool = False) -> Decimal:
    """Coerce a money amount to Decimal and check its sign."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError(f"{field_name} must be a number", field=field_name)
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number", field=field_name)

    if allow_zero:
        if amount < 0:
            raise ValidationError(f"{field_name} cannot be negative", field=field_name)
    elif amount <= 0:
        raise ValidationError(f"{field_name} must be greater than zero", field=field_name)
    return amount


def require_date_range(start: Optional[date], end: Optional[date]) -> None:
    """Reject an inverted range. Either bound may be open (None)."""
    if start is not None and end is not None and end < start:
        raise ValidationError("end date is before start date", field="end")
