from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal

import pytest

from src.branch_timeclock.branch_timeclock.advances.model import SalaryAdvance
from src.branch_timeclock.branch_timeclock.attendance.model import AttendanceRecord
from src.branch_timeclock.branch_timeclock.branches.model import Branch
from src.branch_timeclock.branch_timeclock.core.enums import PaymentType, RecordType
from src.branch_timeclock.branch_timeclock.core.exceptions import WriteError
from src.branch_timeclock.branch_timeclock.employees.model import Employee
from src.branch_timeclock.branch_timeclock.payroll.model import Payroll


def at(day, hh, mm=0):
    return datetime.combine(day, time(hh, mm))


def punch(record_id, record_type, recorded_at, *, employee_id=1, branch_id=1):
    return AttendanceRecord(
        record_id=record_id,
        employee_id=employee_id,
        branch_id=branch_id,
        record_type=RecordType(record_type),
        recorded_at=recorded_at,
    )


def full_day(first_id, day, *, employee_id=1):
    return [
        punch(first_id, "entry", at(day, 8), employee_id=employee_id),
        punch(first_id + 1, "lunch_start", at(day, 13), employee_id=employee_id),
        punch(first_id + 2, "lunch_end", at(day, 14), employee_id=employee_id),
        punch(first_id + 3, "exit", at(day, 17), employee_id=employee_id),
    ]


def week_of_full_days(monday, *, employee_id=1, days=6):
    records = []
    for offset in range(days):
        records.extend(full_day(1 + offset * 4, monday + timedelta(days=offset), employee_id=employee_id))
    return records


def _matches(row, *, start, end, branch_id, employee_id):
    day = row.recorded_at.date()
    return (
        (start is None or start <= day)
        and (end is None or day <= end)
        and (branch_id is None or row.branch_id == branch_id)
        and (employee_id is None or row.employee_id == employee_id)
    )


def _newest_first(rows, key):
    return sorted(rows, key=key, reverse=True)


class FakeEmployeesRepo:
    def __init__(self, *employees):
        self._by_id = {e.employee_id: e for e in employees}
        self.audits = []

    def get_by_id(self, employee_id):
        return self._by_id.get(int(employee_id))

    def list_active_for_branch(self, branch_id):
        return [e for e in self._by_id.values() if e.branch_id == int(branch_id) and e.is_active]

    def deactivate(self, employee_id, *, audit=None):
        employee = self._by_id.get(int(employee_id))
        if not employee or not employee.is_active:
            return False
        self._by_id[employee.employee_id] = replace(employee, is_active=False)
        if audit is not None:
            self.audits.append(audit)
        return True


class FakeBranchesRepo:
    def __init__(self, *branches):
        self._by_id = {b.branch_id: b for b in branches}

    def get_by_id(self, branch_id):
        return self._by_id.get(int(branch_id))


class FakeAttendanceRepo:
    def __init__(self, records=()):
        self.records = list(records)
        self._next_id = max((r.record_id for r in self.records), default=0) + 1

    def list_for_employee(self, employee_id, *, start, end):
        # Reversed on purpose: callers must not depend on store ordering.
        return [
            r
            for r in reversed(self.records)
            if r.employee_id == int(employee_id) and start <= r.recorded_at.date() <= end
        ]

    def get_last_for_day(self, employee_id, work_date):
        same_day = [r for r in self.records if r.employee_id == int(employee_id) and r.recorded_at.date() == work_date]
        return max(same_day, key=lambda r: r.sort_key) if same_day else None

    def search(self, *, start, end, branch_id=None, employee_id=None):
        found = [r for r in self.records if _matches(r, start=start, end=end, branch_id=branch_id, employee_id=employee_id)]
        return _newest_first(found, lambda r: r.sort_key)

    def append(self, *, employee_id, branch_id, record_type, recorded_at):
        rid = self._next_id
        self._next_id += 1
        self.records.append(punch(rid, record_type, recorded_at, employee_id=employee_id, branch_id=branch_id))
        return rid


class FakeAdvancesRepo:
    def __init__(self, advances=()):
        self.advances = list(advances)

    def list_for_employee(self, employee_id, *, start, end):
        return [
            a
            for a in self.advances
            if a.employee_id == int(employee_id) and start <= a.recorded_at.date() <= end
        ]

    def search(self, *, start=None, end=None, branch_id=None, employee_id=None):
        found = [a for a in self.advances if _matches(a, start=start, end=end, branch_id=branch_id, employee_id=employee_id)]
        return _newest_first(found, lambda a: (a.recorded_at, a.advance_id))

    def append(self, *, employee_id, branch_id, amount, reason, recorded_at):
        aid = len(self.advances) + 1
        self.advances.append(
            SalaryAdvance(
                advance_id=aid,
                employee_id=employee_id,
                branch_id=branch_id,
                amount=amount,
                reason=reason,
                recorded_at=recorded_at,
            )
        )
        return aid


class FakePayrollsRepo:
    """Stages a batch and only publishes it when every row succeeds."""

    def __init__(self, *, fail_on_row=None):
        self.rows: dict[int, Payroll] = {}
        self.audits = []
        self.fail_on_row = fail_on_row
        self._next_id = 1

    def insert_batch(self, rows, *, audit=None):
        staged = {}
        next_id = self._next_id
        for index, row in enumerate(rows, start=1):
            if self.fail_on_row == index:
                raise WriteError(f"simulated failure on row {index}")
            staged[next_id] = replace(row, payroll_id=next_id)
            next_id += 1

        self.rows.update(staged)
        self._next_id = next_id
        if audit is not None:
            self.audits.append(audit)
        return list(staged)

    def get_by_id(self, payroll_id):
        return self.rows.get(int(payroll_id))

    def update_status(self, payroll_id, *, current, target):
        row = self.rows.get(int(payroll_id))
        if not row or row.status != current:
            return False
        self.rows[int(payroll_id)] = replace(row, status=target)
        return True

    def list_for_employee(self, employee_id, *, limit=50):
        return [r for r in self.rows.values() if r.employee_id == int(employee_id)][:limit]

    def search(self, *, start, end, branch_id=None, employee_id=None):
        return [
            r
            for r in sorted(self.rows.values(), key=lambda r: r.payroll_id, reverse=True)
            if start <= r.period_start and r.period_end <= end
            and (branch_id is None or r.branch_id == branch_id)
            and (employee_id is None or r.employee_id == employee_id)
        ]


@pytest.fixture
def monday():
    # 2025-01-06 is a Monday; that week ends on Sunday 2025-01-12.
    return date(2025, 1, 6)


@pytest.fixture
def branch():
    return Branch(branch_id=1, name="Centro")


@pytest.fixture
def daily_employee():
    return Employee(
        employee_id=1,
        branch_id=1,
        name="Ana",
        payment_type=PaymentType.DAILY,
        base_salary=Decimal("100"),
    )


@pytest.fixture
def weekly_employee():
    return Employee(
        employee_id=2,
        branch_id=1,
        name="Luis",
        payment_type=PaymentType.WEEKLY,
        base_salary=Decimal("1000"),
    )
