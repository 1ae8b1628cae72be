from __future__ import annotations

from flask import Flask

from ..common.http import date_field, int_field, json_body, ok
from ..container import Container
from ..core.constants import DEFAULT_GENERATED_BY
from ..core.exceptions import ValidationError
from .model import PayPeriod
from .period import make_period


def _period_from(data: dict) -> PayPeriod:
    return make_period(
        date_field(data, "period_start"),
        date_field(data, "period_end", required=False),
        kind=data.get("period_kind") or None,
    )


def _deductions_from(data: dict) -> dict[int, dict]:
    items = data.get("deductions") or []
    if not isinstance(items, list):
        raise ValidationError("deductions must be a list", field="deductions")

    out: dict[int, dict] = {}
    for item in items:
        if not isinstance(item, dict):
            raise ValidationError("each deduction must be an object", field="deductions")
        out[int_field(item, "employee_id")] = item
    return out


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/api/payroll/calculate", methods=["POST"], endpoint="payroll_calculate")
    def payroll_calculate():
        data = json_body()
        period = _period_from(data)

        employee_id = int_field(data, "employee_id", required=False)
        if employee_id is not None:
            calc = service.calculate_employee(employee_id, period)
            return ok({"calculations": [calc.to_dict()], "failures": []})

        run = service.calculate_branch(int_field(data, "branch_id"), period)
        return ok(
            {
                "branch_id": run.branch_id,
                "period_start": period.start.isoformat(),
                "period_end": period.end.isoformat(),
                "calculations": [c.to_dict() for c in run.calculations],
                "failures": [
                    {"employee_id": f.employee_id, "employee_name": f.employee_name, "message": f.message, "field": f.field}
                    for f in run.failures
                ],
                "total_to_pay": str(run.total_to_pay),
            }
        )

    @app.route("/api/payroll/confirm", methods=["POST"], endpoint="payroll_confirm")
    def payroll_confirm():
        """Recompute the branch for the period, apply the reviewed deductions and save all rows at once."""
        data = json_body()
        period = _period_from(data)
        deductions = _deductions_from(data)

        run = service.calculate_branch(int_field(data, "branch_id"), period)
        calculations = []
        for calc in run.calculations:
            item = deductions.get(calc.employee.employee_id)
            if item is not None:
                calc = service.apply_deduction(calc, item.get("amount", 0), item.get("reason"))
            calculations.append(calc)

        ids = service.confirm(calculations, generated_by=(data.get("generated_by") or DEFAULT_GENERATED_BY))
        return ok(
            {
                "payroll_ids": ids,
                "skipped": [f.employee_id for f in run.failures],
                "total_to_pay": str(sum(c.total_to_pay for c in calculations)),
            },
            status=201,
        )

    @app.route("/api/payroll/<int:payroll_id>/paid", methods=["POST"], endpoint="payroll_mark_paid")
    def payroll_mark_paid(payroll_id: int):
        payroll = service.mark_paid(payroll_id)
        return ok({"payroll": payroll.to_dict()})

    @app.route("/api/employees/<int:employee_id>/payroll", methods=["GET"], endpoint="payroll_history")
    def payroll_history(employee_id: int):
        return ok({"payrolls": [p.to_dict() for p in service.history(employee_id)]})
