from __future__ import annotations

from enum import Enum


class RecordType(str, Enum):
    """Loại chấm công (punch) lưu trong CSDL."""

    ENTRY = "entry"
    LUNCH_START = "lunch_start"
    LUNCH_END = "lunch_end"
    EXIT = "exit"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value):
        # Stored values outside the punch cycle load as UNKNOWN and are
        # reported as anomalies instead of breaking the read.
        return cls.UNKNOWN


class PaymentType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class PeriodKind(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"


class PayrollStatus(str, Enum):
    """Trạng thái bảng lương: chỉ đi tiến, không quay lại."""

    DRAFT = "draft"
    CONFIRMED = "confirmed"
    PAID = "paid"

    def can_transition_to(self, target: "PayrollStatus") -> bool:
        order = [PayrollStatus.DRAFT, PayrollStatus.CONFIRMED, PayrollStatus.PAID]
        return order.index(target) == order.index(self) + 1


class AnomalyKind(str, Enum):
    MISSING_EXIT = "missing_exit"
    MISSING_LUNCH_END = "missing_lunch_end"
    OUT_OF_SEQUENCE = "out_of_sequence"
    UNKNOWN_TYPE = "unknown_type"
    ABSENCE = "absence"


class ReportKind(str, Enum):
    ATTENDANCE = "attendance"
    ADVANCES = "advances"
    PAYROLL = "payroll"
