from __future__ import annotations

from flask import Flask, request

from ..advances.controller import advance_to_dict
from ..common.http import date_field, int_field, ok
from ..container import Container
from ..core.enums import ReportKind


def _row_to_dict(kind: ReportKind, row) -> dict:
    if kind == ReportKind.ATTENDANCE:
        return {
            "record_id": row.record_id,
            "employee_id": row.employee_id,
            "branch_id": row.branch_id,
            "record_type": row.record_type.value,
            "recorded_at": row.recorded_at.isoformat(),
        }
    if kind == ReportKind.ADVANCES:
        return advance_to_dict(row)
    return row.to_dict()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/reports/<kind>", methods=["GET"], endpoint="report")
    def report(kind: str):
        """?start=YYYY-MM-DD&end=YYYY-MM-DD[&branch_id=][&employee_id=]"""
        args = request.args
        result = container.report_service.build(
            kind,
            date_field(args, "start"),
            date_field(args, "end"),
            branch_id=int_field(args, "branch_id", required=False),
            employee_id=int_field(args, "employee_id", required=False),
        )
        return ok(
            {
                "kind": result.kind.value,
                "start": result.start.isoformat(),
                "end": result.end.isoformat(),
                "branch_id": result.branch_id,
                "employee_id": result.employee_id,
                "rows": [_row_to_dict(result.kind, r) for r in result.rows],
                "total": str(result.total) if result.total is not None else None,
            }
        )
