from datetime import date, datetime, timedelta, timezone

import pytest

from conftest import at, punch
from src.branch_timeclock.branch_timeclock.attendance.sequencer import (
    allowed_next_types,
    needs_choice,
    next_punch_type,
)
from src.branch_timeclock.branch_timeclock.core.enums import RecordType

TODAY = date(2025, 1, 7)


def test_no_record_today_starts_with_entry():
    assert next_punch_type(None, today=TODAY) == RecordType.ENTRY
    assert allowed_next_types(None, today=TODAY) == (RecordType.ENTRY,)


@pytest.mark.parametrize(
    "last, expected",
    [
        ("entry", RecordType.LUNCH_START),
        ("lunch_start", RecordType.LUNCH_END),
        ("lunch_end", RecordType.EXIT),
        ("exit", RecordType.ENTRY),
    ],
)
def test_default_cycle(last, expected):
    record = punch(1, last, at(TODAY, 9))
    assert next_punch_type(record, today=TODAY) == expected


def test_yesterdays_lunch_start_resets_to_entry():
    yesterday = punch(1, "lunch_start", at(TODAY - timedelta(days=1), 13))
    assert next_punch_type(yesterday, today=TODAY) == RecordType.ENTRY
    assert not needs_choice(yesterday, today=TODAY)


def test_entry_offers_lunch_or_exit():
    record = punch(1, "entry", at(TODAY, 8))
    assert allowed_next_types(record, today=TODAY) == (RecordType.LUNCH_START, RecordType.EXIT)
    assert needs_choice(record, today=TODAY)


def test_lunch_start_only_allows_lunch_end():
    record = punch(1, "lunch_start", at(TODAY, 13))
    assert allowed_next_types(record, today=TODAY) == (RecordType.LUNCH_END,)


def test_unknown_stored_type_restarts_cycle():
    record = punch(1, "clock_in", at(TODAY, 8))
    assert record.record_type == RecordType.UNKNOWN
    assert next_punch_type(record, today=TODAY) == RecordType.ENTRY
    assert allowed_next_types(record, today=TODAY) == (RecordType.ENTRY,)


def test_same_input_same_output():
    record = punch(1, "lunch_end", at(TODAY, 14))
    assert next_punch_type(record, today=TODAY) == next_punch_type(record, today=TODAY)


def test_aware_timestamp_uses_local_day():
    # 02:00 UTC on the 8th is still the 7th at UTC-6.
    record = punch(1, "entry", datetime(2025, 1, 8, 2, 0, tzinfo=timezone.utc))
    tz = timezone(timedelta(hours=-6))
    assert next_punch_type(record, today=TODAY, tz=tz) == RecordType.LUNCH_START
