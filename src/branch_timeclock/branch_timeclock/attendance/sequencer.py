"""Punch sequencer: which punch comes next on the clock.

The cycle is ``entry -> lunch_start -> lunch_end -> exit`` and restarts at
``entry`` every calendar day. Shifts without a lunch break may go straight
from ``entry`` to ``exit``, so that step offers a choice. All functions here
are pure: "today" is always passed in by the caller.
"""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Optional

from ..common.datetime_utils import local_day
from ..core.enums import RecordType
from .model import AttendanceRecord

_DEFAULT_NEXT: dict[Optional[RecordType], RecordType] = {
    None: RecordType.ENTRY,
    RecordType.ENTRY: RecordType.LUNCH_START,
    RecordType.LUNCH_START: RecordType.LUNCH_END,
    RecordType.LUNCH_END: RecordType.EXIT,
    RecordType.EXIT: RecordType.ENTRY,
}

# Default first.
_LEGAL_NEXT: dict[Optional[RecordType], tuple[RecordType, ...]] = {
    None: (RecordType.ENTRY,),
    RecordType.ENTRY: (RecordType.LUNCH_START, RecordType.EXIT),
    RecordType.LUNCH_START: (RecordType.LUNCH_END,),
    RecordType.LUNCH_END: (RecordType.EXIT,),
    RecordType.EXIT: (RecordType.ENTRY,),
}


def last_type_today(
    last_record: Optional[AttendanceRecord],
    *,
    today: date,
    tz: Optional[tzinfo] = None,
) -> Optional[RecordType]:
    """Type of the last punch if it happened today, else None."""
    if last_record is None:
        return None
    if local_day(last_record.recorded_at, tz) != today:
        return None
    return last_record.record_type


def allowed_after(previous: Optional[RecordType]) -> tuple[RecordType, ...]:
    # UNKNOWN restarts the cycle.
    return _LEGAL_NEXT.get(previous, _LEGAL_NEXT[None])


def next_punch_type(
    last_record: Optional[AttendanceRecord],
    *,
    today: date,
    tz: Optional[tzinfo] = None,
) -> RecordType:
    previous = last_type_today(last_record, today=today, tz=tz)
    return _DEFAULT_NEXT.get(previous, RecordType.ENTRY)


def allowed_next_types(
    last_record: Optional[AttendanceRecord],
    *,
    today: date,
    tz: Optional[tzinfo] = None,
) -> tuple[RecordType, ...]:
    return allowed_after(last_type_today(last_record, today=today, tz=tz))


def needs_choice(
    last_record: Optional[AttendanceRecord],
    *,
    today: date,
    tz: Optional[tzinfo] = None,
) -> bool:
    return len(allowed_next_types(last_record, today=today, tz=tz)) > 1
