from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..core.constants import BIWEEKLY_PERIOD_DAYS, WEEKLY_PERIOD_DAYS
from ..core.enums import PeriodKind
from ..core.exceptions import ValidationError
from .model import PayPeriod

_KIND_BY_LENGTH = {
    WEEKLY_PERIOD_DAYS: PeriodKind.WEEKLY,
    BIWEEKLY_PERIOD_DAYS: PeriodKind.BIWEEKLY,
}


def resolve_period_end(start: date, kind: PeriodKind) -> date:
    length = WEEKLY_PERIOD_DAYS if PeriodKind(kind) == PeriodKind.WEEKLY else BIWEEKLY_PERIOD_DAYS
    return start + timedelta(days=length - 1)


def infer_period_kind(start: date, end: date) -> PeriodKind:
    """Kind implied by an explicit range: 7 days is weekly, 14 is biweekly."""
    kind = _KIND_BY_LENGTH.get((end - start).days + 1)
    if kind is None:
        raise ValidationError(
            "period_kind is required when the period is neither 7 nor 14 days long",
            field="period_kind",
        )
    return kind


def make_period(
    start: Optional[date],
    end: Optional[date] = None,
    *,
    kind: Optional[PeriodKind] = None,
) -> PayPeriod:
    """Build a validated period.

    ``end`` defaults to the length implied by ``kind`` (weekly when both are
    missing). With an explicit ``end`` and no ``kind``, the kind is inferred
    from the length so a 14-day range is never paid as one week.
    """
    if start is None:
        raise ValidationError("Period start is required", field="period_start")
    if kind is not None:
        try:
            kind = PeriodKind(kind)
        except ValueError:
            raise ValidationError("Period kind must be weekly or biweekly", field="period_kind")

    if end is not None and end < start:
        raise ValidationError("Period end is before period start", field="period_end")
    if end is None:
        kind = kind or PeriodKind.WEEKLY
        end = resolve_period_end(start, kind)
    elif kind is None:
        kind = infer_period_kind(start, end)
    return PayPeriod(start=start, end=end, kind=kind)
