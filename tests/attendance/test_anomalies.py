from datetime import timedelta

from conftest import at, full_day, punch
from src.branch_timeclock.branch_timeclock.attendance.anomalies import (
    absence_anomalies,
    incomplete_shifts,
    sequence_anomalies,
)
from src.branch_timeclock.branch_timeclock.core.enums import AnomalyKind


def test_entry_and_exit_is_complete(monday):
    records = [punch(1, "entry", at(monday, 8)), punch(2, "exit", at(monday, 17))]
    assert incomplete_shifts(records) == []
    assert sequence_anomalies(records) == []


def test_entry_alone_is_missing_exit(monday):
    found = incomplete_shifts([punch(1, "entry", at(monday, 8))])

    assert len(found) == 1
    assert found[0].work_date == monday
    assert found[0].kind == AnomalyKind.MISSING_EXIT
    assert found[0].description == "missing exit"


def test_open_lunch_and_open_shift_on_same_day(monday):
    records = [punch(1, "entry", at(monday, 8)), punch(2, "lunch_start", at(monday, 13))]
    kinds = [a.kind for a in incomplete_shifts(records)]
    assert kinds == [AnomalyKind.MISSING_EXIT, AnomalyKind.MISSING_LUNCH_END]


def test_every_incomplete_day_is_reported(monday):
    tuesday = monday + timedelta(days=1)
    records = [punch(2, "entry", at(tuesday, 8)), punch(1, "entry", at(monday, 8))]
    assert [a.work_date for a in incomplete_shifts(records)] == [monday, tuesday]


def test_full_day_has_no_anomalies(monday):
    records = full_day(1, monday)
    assert incomplete_shifts(records) == []
    assert sequence_anomalies(records) == []


def test_duplicate_entry_is_out_of_sequence_not_an_error(monday):
    records = [
        punch(1, "entry", at(monday, 8)),
        punch(2, "entry", at(monday, 8)),
        punch(3, "exit", at(monday, 17)),
    ]
    found = sequence_anomalies(records)

    assert len(found) == 1
    assert found[0].kind == AnomalyKind.OUT_OF_SEQUENCE
    assert found[0].description == "entry after entry at 08:00"


def test_day_starting_with_exit_is_out_of_sequence(monday):
    found = sequence_anomalies([punch(1, "exit", at(monday, 17))])
    assert [a.description for a in found] == ["exit after start of day at 17:00"]


def test_unknown_type_is_reported(monday):
    records = [punch(1, "entry", at(monday, 8)), punch(2, "break", at(monday, 10)), punch(3, "exit", at(monday, 17))]
    kinds = [a.kind for a in sequence_anomalies(records)]
    assert AnomalyKind.UNKNOWN_TYPE in kinds


def test_input_order_does_not_matter(monday):
    records = full_day(1, monday)
    assert sequence_anomalies(list(reversed(records))) == []


def test_absence_anomalies(monday):
    found = absence_anomalies([monday])
    assert found[0].kind == AnomalyKind.ABSENCE
    assert found[0].to_dict()["date"] == "2025-01-06"
