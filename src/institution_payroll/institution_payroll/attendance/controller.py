from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, ok, parse_date_value, parse_datetime_value, parse_employee_type, parse_enum
from ..container import Container
from ..core.enums import CorrectionKind
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def employee(employee_type: str, employee_id: str):
        return container.employee_service.require(parse_employee_type(employee_type), employee_id)

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/attendance/<int:year>/<int:month>",
        methods=["GET"],
        endpoint="attendance_month",
    )
    def month_view(employee_type: str, employee_id: str, year: int, month: int):
        today = request.args.get("today")
        try:
            today = parse_iso_date(today) if today else None
        except ValueError:
            raise ValidationError("today must be YYYY-MM-DD")
        view = container.attendance_service.build_month(employee(employee_type, employee_id), year, month, today=today)
        return ok(
            {
                "year": view.year,
                "month": view.month,
                "days": view.days,
                "stats": view.stats,
                "overtime_created": view.overtime_created,
                "warnings": view.warnings,
            }
        )

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/attendance/<day>/correction",
        methods=["POST"],
        endpoint="attendance_correct",
    )
    def correct(employee_type: str, employee_id: str, day: str):
        body = json_body()
        record = container.attendance_service.correct_attendance(
            employee(employee_type, employee_id),
            parse_date_value(day, "date"),
            check_in=parse_datetime_value(body.get("check_in_time"), "check_in_time"),
            check_out=parse_datetime_value(body.get("check_out_time"), "check_out_time"),
            reason=body.get("reason") or "",
            corrected_by=str(body.get("corrected_by") or ""),
        )
        return ok(record)

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/attendance/<day>/leave",
        methods=["POST"],
        endpoint="attendance_mark_leave",
    )
    def mark_leave(employee_type: str, employee_id: str, day: str):
        body = json_body()
        container.attendance_service.mark_as_leave(
            employee(employee_type, employee_id),
            parse_date_value(day, "date"),
            kind=parse_enum(CorrectionKind, body.get("attendance_type"), "attendance type"),
            reason=body.get("reason") or "",
            corrected_by=str(body.get("corrected_by") or ""),
        )
        return ok(status=201)

    @app.route("/api/overtime/<overtime_id>/approve", methods=["POST"], endpoint="overtime_approve")
    def approve_overtime(overtime_id: str):
        body = json_body()
        container.attendance_service.approve_overtime(overtime_id, approver_id=str(body.get("approver_id") or ""))
        return ok()

    @app.route("/api/overtime/<overtime_id>/reject", methods=["POST"], endpoint="overtime_reject")
    def reject_overtime(overtime_id: str):
        body = json_body()
        container.attendance_service.reject_overtime(
            overtime_id,
            approver_id=str(body.get("approver_id") or ""),
            reason=body.get("reason") or "",
        )
        return ok()
