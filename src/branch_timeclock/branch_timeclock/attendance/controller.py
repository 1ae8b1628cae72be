from __future__ import annotations

from flask import Flask

from ..common.http import int_field, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/punch-options", methods=["GET"], endpoint="punch_options")
    def punch_options(employee_id: int):
        options = container.attendance_service.punch_options(employee_id)
        last = options.last_record
        return ok(
            {
                "employee_id": options.employee_id,
                "last_record": (
                    {"record_type": last.record_type.value, "recorded_at": last.recorded_at.isoformat()}
                    if last
                    else None
                ),
                "default_type": options.default_type.value,
                "choices": [t.value for t in options.choices],
                "needs_choice": options.needs_choice,
            }
        )

    @app.route("/api/punches", methods=["POST"], endpoint="append_punch")
    def append_punch():
        data = json_body()
        employee_id = int_field(data, "employee_id")
        raw_type = data.get("record_type")

        record = container.attendance_service.append_punch(employee_id, raw_type or None)
        return ok(
            {
                "record_id": record.record_id,
                "record_type": record.record_type.value,
                "recorded_at": record.recorded_at.isoformat(),
            },
            status=201,
        )
