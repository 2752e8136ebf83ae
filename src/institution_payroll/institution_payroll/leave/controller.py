from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok, parse_date_value, parse_employee_type, parse_enum
from ..container import Container
from ..core.enums import LeaveType


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees/<employee_type>/<employee_id>/leaves", methods=["POST"], endpoint="leave_apply")
    def apply_leave(employee_type: str, employee_id: str):
        body = json_body()
        employee = container.employee_service.require(parse_employee_type(employee_type), employee_id)
        application = container.leave_service.apply_leave(
            employee,
            start_date=parse_date_value(body.get("start_date"), "start_date"),
            end_date=parse_date_value(body.get("end_date"), "end_date"),
            leave_type=parse_enum(LeaveType, body.get("leave_type"), "leave type"),
            reason=body.get("reason") or "",
        )
        return ok(application, 201)

    @app.route("/api/leaves/<application_id>/approve", methods=["POST"], endpoint="leave_approve")
    def approve_leave(application_id: str):
        body = json_body()
        container.leave_service.approve_leave(
            application_id,
            approver_id=str(body.get("approver_id") or ""),
            user_type=parse_employee_type(body.get("user_type") or "").value,
        )
        return ok()

    @app.route("/api/leaves/<application_id>/reject", methods=["POST"], endpoint="leave_reject")
    def reject_leave(application_id: str):
        body = json_body()
        container.leave_service.reject_leave(
            application_id,
            approver_id=str(body.get("approver_id") or ""),
            reason=body.get("reason") or "",
        )
        return ok()
