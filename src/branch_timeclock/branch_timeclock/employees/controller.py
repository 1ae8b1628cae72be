from __future__ import annotations

from flask import Flask

from ..common.http import ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<int:employee_id>/deactivate", methods=["POST"], endpoint="deactivate_employee")
    def deactivate_employee(employee_id: int):
        employee = container.employee_service.deactivate(employee_id)
        return ok({"employee_id": employee.employee_id, "is_active": employee.is_active})
