from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, ok, parse_decimal_value, parse_employee_type
from ..container import Container
from ..core.exceptions import ValidationError
from .model import SalaryStructure, StatutoryInfo


def register(app: Flask, container: Container) -> None:
    def employee(employee_type: str, employee_id: str):
        return container.employee_service.require(parse_employee_type(employee_type), employee_id)

    def query_options() -> dict:
        manual = request.args.get("overtime_pay")
        today = request.args.get("today")
        try:
            today = parse_iso_date(today) if today else None
        except ValueError:
            raise ValidationError("today must be YYYY-MM-DD")
        return {
            "manual_overtime_pay": parse_decimal_value(manual, "overtime_pay") if manual not in (None, "") else None,
            "today": today,
        }

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/payout/<int:year>/<int:month>",
        methods=["GET"],
        endpoint="payroll_payout",
    )
    def payout(employee_type: str, employee_id: str, year: int, month: int):
        result = container.payroll_service.monthly_payout(
            employee(employee_type, employee_id), year, month, **query_options()
        )
        return ok({"stats": result.month_view.stats, "salary": result.details, "payout": result.payout})

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/payslip/<int:year>/<int:month>",
        methods=["GET"],
        endpoint="payroll_payslip",
    )
    def payslip(employee_type: str, employee_id: str, year: int, month: int):
        return ok(
            container.payroll_service.payslip(employee(employee_type, employee_id), year, month, **query_options())
        )

    @app.route("/api/employees/<employee_type>/<employee_id>/salary", methods=["GET"], endpoint="payroll_salary")
    def salary(employee_type: str, employee_id: str):
        return ok(container.payroll_service.salary_details(employee(employee_type, employee_id)))

    @app.route(
        "/api/employees/<employee_type>/<employee_id>/salary", methods=["PUT"], endpoint="payroll_update_salary"
    )
    def update_salary(employee_type: str, employee_id: str):
        body = json_body()
        structure = body.get("salary_structure")
        statutory = body.get("statutory_info")
        if not isinstance(structure, dict) or not isinstance(statutory, dict):
            raise ValidationError("salary_structure and statutory_info are required")
        try:
            parsed_structure = SalaryStructure.from_dict(structure)
        except ValueError as exc:
            raise ValidationError(str(exc))
        container.payroll_service.update_salary(
            employee(employee_type, employee_id),
            parsed_structure,
            StatutoryInfo.from_dict(statutory),
            designation=body.get("designation"),
        )
        return ok()
