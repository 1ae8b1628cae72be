"""Day buckets: partition punches by local calendar day.

Shared by the punch clock, the anomaly detector and payroll so every caller
agrees on which day a punch belongs to.
"""

from __future__ import annotations

from datetime import date, timedelta, tzinfo
from typing import Iterable, Iterator, Optional

from ..common.datetime_utils import local_day
from ..core.constants import REST_WEEKDAYS
from ..core.enums import RecordType
from .model import AttendanceRecord


def sort_records(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    return sorted(records, key=lambda r: r.sort_key)


def group_by_day(
    records: Iterable[AttendanceRecord],
    *,
    tz: Optional[tzinfo] = None,
) -> dict[date, list[AttendanceRecord]]:
    """Sorted punches per day, days in ascending order."""
    buckets: dict[date, list[AttendanceRecord]] = {}
    for record in sort_records(records):
        buckets.setdefault(local_day(record.recorded_at, tz), []).append(record)
    return buckets


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def days_in_period(start: date, end: date) -> int:
    return (end - start).days + 1


def worked_days(
    records: Iterable[AttendanceRecord],
    start: date,
    end: date,
    *,
    tz: Optional[tzinfo] = None,
) -> set[date]:
    """Days in ``[start, end]`` with at least one entry punch."""
    days = set()
    for record in records:
        if record.record_type != RecordType.ENTRY:
            continue
        day = local_day(record.recorded_at, tz)
        if start <= day <= end:
            days.add(day)
    return days


def absences(
    records: Iterable[AttendanceRecord],
    start: date,
    end: date,
    *,
    tz: Optional[tzinfo] = None,
    rest_weekdays: frozenset[int] = REST_WEEKDAYS,
) -> list[date]:
    worked = worked_days(records, start, end, tz=tz)
    return [d for d in iter_days(start, end) if d.weekday() not in rest_weekdays and d not in worked]
