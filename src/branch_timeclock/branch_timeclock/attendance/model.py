from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AnomalyKind, RecordType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one immutable punch on the branch clock."""

    record_id: int
    employee_id: int
    branch_id: int
    record_type: RecordType
    recorded_at: datetime

    @property
    def sort_key(self) -> tuple[datetime, int]:
        # record_id follows insertion order, so it breaks timestamp ties.
        return (self.recorded_at, self.record_id)


@dataclass(frozen=True)
class Anomaly:
    """Advisory finding about a day's punches. Never blocks a computation."""

    work_date: date
    kind: AnomalyKind
    description: str

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "kind": self.kind.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class PunchOptions:
    """What the clock should offer an employee right now."""

    employee_id: int
    last_record: Optional[AttendanceRecord]
    default_type: RecordType
    choices: tuple[RecordType, ...]

    @property
    def needs_choice(self) -> bool:
        return len(self.choices) > 1
