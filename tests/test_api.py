from datetime import datetime
from decimal import Decimal

import pytest

from conftest import (
    FakeAdvancesRepo,
    FakeAttendanceRepo,
    FakeBranchesRepo,
    FakeEmployeesRepo,
    FakePayrollsRepo,
)
from src.branch_timeclock.branch_timeclock.advances import service as advances_service
from src.branch_timeclock.branch_timeclock.attendance import service as attendance_service
from src.branch_timeclock.branch_timeclock.container import build_services
from src.branch_timeclock.branch_timeclock.main import create_app

NOW = datetime(2025, 1, 7, 8, 0)


@pytest.fixture
def repos(branch, daily_employee, weekly_employee):
    return {
        "employees_repo": FakeEmployeesRepo(daily_employee, weekly_employee),
        "branches_repo": FakeBranchesRepo(branch),
        "attendance_repo": FakeAttendanceRepo(),
        "advances_repo": FakeAdvancesRepo(),
        "payrolls_repo": FakePayrollsRepo(),
    }


@pytest.fixture
def client(monkeypatch, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setattr(attendance_service, "now_local", lambda tz=None: NOW)
    monkeypatch.setattr(advances_service, "now_local", lambda tz=None: NOW)
    app = create_app(build_services(**repos))
    return app.test_client()


def test_punch_flow_with_choice(client, repos):
    resp = client.post("/api/punches", json={"employee_id": 1})
    assert resp.status_code == 201
    assert resp.get_json()["record_type"] == "entry"

    options = client.get("/api/employees/1/punch-options").get_json()
    assert options["needs_choice"] is True
    assert options["choices"] == ["lunch_start", "exit"]

    resp = client.post("/api/punches", json={"employee_id": 1, "record_type": "exit"})
    assert resp.status_code == 201
    assert [r.record_type.value for r in repos["attendance_repo"].records] == ["entry", "exit"]


def test_invalid_punch_type_returns_field(client):
    resp = client.post("/api/punches", json={"employee_id": 1, "record_type": "lunch_end"})
    body = resp.get_json()

    assert resp.status_code == 400
    assert body["success"] is False
    assert body["field"] == "record_type"


def test_unknown_employee_is_404(client):
    resp = client.get("/api/employees/99/punch-options")
    assert resp.status_code == 404


def test_record_advance(client, repos):
    resp = client.post("/api/advances", json={"employee_id": 2, "amount": "200", "reason": "rent"})
    assert resp.status_code == 201
    assert repos["advances_repo"].advances[0].amount == Decimal("200")

    resp = client.post("/api/advances", json={"employee_id": 2, "amount": 0})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "amount"


def test_calculate_branch(client, repos):
    client.post("/api/advances", json={"employee_id": 2, "amount": "200"})

    resp = client.post(
        "/api/payroll/calculate",
        json={"branch_id": 1, "period_start": "2025-01-06", "period_kind": "weekly"},
    )
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["period_end"] == "2025-01-12"
    by_id = {c["employee_id"]: c for c in body["calculations"]}
    assert by_id[1]["total_to_pay"] == "700"
    assert by_id[2]["total_to_pay"] == "800"
    assert len(by_id[1]["absences"]) == 6
    assert body["failures"] == []


def test_calculate_requires_period_start(client):
    resp = client.post("/api/payroll/calculate", json={"branch_id": 1})
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "period_start"


def test_confirm_applies_deductions(client, repos):
    resp = client.post(
        "/api/payroll/confirm",
        json={
            "branch_id": 1,
            "period_start": "2025-01-06",
            "deductions": [{"employee_id": 1, "amount": "100", "reason": "absences"}],
        },
    )
    body = resp.get_json()

    assert resp.status_code == 201
    assert body["payroll_ids"] == [1, 2]
    saved = repos["payrolls_repo"].rows
    assert saved[1].total_to_pay == Decimal("600")
    assert saved[1].deduction_reason == "absences"

    paid = client.post("/api/payroll/1/paid").get_json()
    assert paid["payroll"]["status"] == "paid"

    history = client.get("/api/employees/1/payroll").get_json()
    assert len(history["payrolls"]) == 1


def test_confirm_write_failure_is_503_and_saves_nothing(client, repos):
    repos["payrolls_repo"].fail_on_row = 2

    resp = client.post("/api/payroll/confirm", json={"branch_id": 1, "period_start": "2025-01-06"})

    assert resp.status_code == 503
    assert repos["payrolls_repo"].rows == {}


def test_unrecognized_punch_type_is_echoed(client):
    resp = client.post("/api/punches", json={"employee_id": 1, "record_type": "foo"})
    body = resp.get_json()

    assert resp.status_code == 400
    assert "'foo'" in body["message"]


def test_biweekly_range_without_kind_pays_two_weeks(client):
    resp = client.post(
        "/api/payroll/calculate",
        json={"employee_id": 2, "period_start": "2025-01-06", "period_end": "2025-01-19"},
    )
    calc = resp.get_json()["calculations"][0]

    assert resp.status_code == 200
    assert calc["base_salary"] == "2000"


def test_odd_range_without_kind_is_rejected(client):
    resp = client.post(
        "/api/payroll/calculate",
        json={"branch_id": 1, "period_start": "2025-01-06", "period_end": "2025-01-09"},
    )
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "period_kind"


def test_list_advances_by_branch_and_range(client):
    client.post("/api/advances", json={"employee_id": 1, "amount": "30"})
    client.post("/api/advances", json={"employee_id": 2, "amount": "20.50"})

    body = client.get("/api/advances?branch_id=1&start=2025-01-06&end=2025-01-12").get_json()

    assert [a["employee_id"] for a in body["advances"]] == [2, 1]
    assert body["total"] == "50.50"
    assert client.get("/api/advances?start=2025-01-08").get_json()["advances"] == []


def test_reports_endpoint(client):
    client.post("/api/punches", json={"employee_id": 1})
    client.post("/api/punches", json={"employee_id": 2})

    resp = client.get("/api/reports/attendance?start=2025-01-07&end=2025-01-07&employee_id=2")
    body = resp.get_json()

    assert resp.status_code == 200
    assert [(r["employee_id"], r["record_type"]) for r in body["rows"]] == [(2, "entry")]
    assert body["total"] is None


def test_report_without_range_is_rejected(client):
    resp = client.get("/api/reports/payroll?branch_id=1")
    assert resp.status_code == 400
    assert resp.get_json()["field"] == "start"


def test_deactivate_employee(client, repos):
    resp = client.post("/api/employees/1/deactivate")

    assert resp.status_code == 200
    assert resp.get_json()["is_active"] is False
    assert repos["employees_repo"].audits[0].details["employee_id"] == 1
    assert client.get("/api/employees/1/punch-options").status_code == 400
    assert client.post("/api/employees/1/deactivate").status_code == 400
