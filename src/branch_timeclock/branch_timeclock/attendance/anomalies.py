from __future__ import annotations

from datetime import date, tzinfo
from typing import Iterable, Optional

from ..core.enums import AnomalyKind, RecordType
from .days import group_by_day
from .model import AttendanceRecord, Anomaly
from .sequencer import allowed_after


def incomplete_shifts(
    records: Iterable[AttendanceRecord],
    *,
    tz: Optional[tzinfo] = None,
) -> list[Anomaly]:
    """Days where a shift or a lunch break was opened but never closed."""
    found: list[Anomaly] = []
    for day, day_records in group_by_day(records, tz=tz).items():
        types = {r.record_type for r in day_records}
        if RecordType.ENTRY in types and RecordType.EXIT not in types:
            found.append(Anomaly(day, AnomalyKind.MISSING_EXIT, "missing exit"))
        if RecordType.LUNCH_START in types and RecordType.LUNCH_END not in types:
            found.append(Anomaly(day, AnomalyKind.MISSING_LUNCH_END, "missing lunch_end"))
    return found


def sequence_anomalies(
    records: Iterable[AttendanceRecord],
    *,
    tz: Optional[tzinfo] = None,
) -> list[Anomaly]:
    """Punches that break the daily cycle: duplicates, reordering, unknown types.

    Only the first illegal step per day is reported; unknown types are always reported.
    """
    found: list[Anomaly] = []
    for day, day_records in group_by_day(records, tz=tz).items():
        previous: Optional[RecordType] = None
        reported = False
        for record in day_records:
            at = record.recorded_at.strftime("%H:%M")
            if record.record_type == RecordType.UNKNOWN:
                found.append(Anomaly(day, AnomalyKind.UNKNOWN_TYPE, f"unrecognized punch type at {at}"))
            elif not reported and record.record_type not in allowed_after(previous):
                after = previous.value if previous else "start of day"
                found.append(
                    Anomaly(day, AnomalyKind.OUT_OF_SEQUENCE, f"{record.record_type.value} after {after} at {at}")
                )
                reported = True
            previous = record.record_type
    return found


def absence_anomalies(days: Iterable[date]) -> list[Anomaly]:
    return [Anomaly(d, AnomalyKind.ABSENCE, "no entry punch") for d in days]
