from __future__ import annotations

from decimal import Decimal

from flask import Flask, request

from ..common.http import date_field, int_field, json_body, ok
from ..container import Container
from .model import SalaryAdvance


def advance_to_dict(advance: SalaryAdvance) -> dict:
    return {
        "advance_id": advance.advance_id,
        "employee_id": advance.employee_id,
        "branch_id": advance.branch_id,
        "amount": str(advance.amount),
        "reason": advance.reason,
        "recorded_at": advance.recorded_at.isoformat(),
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/advances", methods=["POST"], endpoint="record_advance")
    def record_advance():
        data = json_body()
        advance = container.advance_service.record_advance(
            int_field(data, "employee_id"),
            data.get("amount"),
            data.get("reason"),
        )
        return ok(advance_to_dict(advance), status=201)

    @app.route("/api/advances", methods=["GET"], endpoint="list_advances")
    def list_advances():
        """Advances, optionally narrowed by ?branch_id=&start=&end=."""
        args = request.args
        advances = container.advance_service.list_advances(
            branch_id=int_field(args, "branch_id", required=False),
            start=date_field(args, "start", required=False),
            end=date_field(args, "end", required=False),
        )
        return ok(
            {
                "advances": [advance_to_dict(a) for a in advances],
                "total": str(sum((a.amount for a in advances), Decimal("0"))),
            }
        )
