from __future__ import annotations

from flask import Flask, request

from ..common.http import json_body, ok, parse_date_value, parse_enum
from ..container import Container
from ..core.enums import CalendarDayKind, CalendarType
from .model import CalendarDayEntry, CalendarScope, CompanyScope, InstitutionScope


def _scope(calendar_type: str) -> CalendarScope:
    if parse_enum(CalendarType, calendar_type, "calendar type") == CalendarType.INSTITUTION:
        return InstitutionScope(request.args.get("institution_id") or None)
    return CompanyScope()


def register(app: Flask, container: Container) -> None:
    @app.route("/api/calendars/<calendar_type>/non-working-days", methods=["GET"], endpoint="calendar_non_working_days")
    def non_working_days(calendar_type: str):
        start = parse_date_value(request.args.get("start"), "start")
        end = parse_date_value(request.args.get("end"), "end")
        result = container.calendar_service.resolve(_scope(calendar_type), start, end)
        return ok({"weekends": sorted(result.weekends), "holidays": sorted(result.holidays)})

    @app.route("/api/calendars/<calendar_type>/days/<day>", methods=["PUT"], endpoint="calendar_set_day")
    def set_day(calendar_type: str, day: str):
        body = json_body()
        container.calendar_service.set_day_type(
            _scope(calendar_type),
            parse_date_value(day, "date"),
            parse_enum(CalendarDayKind, body.get("day_type"), "day type"),
            description=body.get("description"),
        )
        return ok()

    @app.route("/api/calendars/<calendar_type>/days/<day>", methods=["DELETE"], endpoint="calendar_delete_day")
    def delete_day(calendar_type: str, day: str):
        container.calendar_service.delete_day_type(_scope(calendar_type), parse_date_value(day, "date"))
        return ok()

    @app.route("/api/calendars/<calendar_type>/days", methods=["POST"], endpoint="calendar_bulk_set")
    def bulk_set(calendar_type: str):
        body = json_body()
        entries = [
            CalendarDayEntry(
                day=parse_date_value(e.get("date"), "date"),
                kind=parse_enum(CalendarDayKind, e.get("day_type"), "day type"),
                description=e.get("description"),
            )
            for e in body.get("days") or []
        ]
        container.calendar_service.bulk_set_day_types(_scope(calendar_type), entries)
        return ok({"count": len(entries)})

    @app.route(
        "/api/calendars/<calendar_type>/months/<int:year>/<int:month>/quick-setup",
        methods=["POST"],
        endpoint="calendar_quick_setup",
    )
    def quick_setup(calendar_type: str, year: int, month: int):
        container.calendar_service.quick_setup_month(_scope(calendar_type), year, month)
        return ok()

    @app.route(
        "/api/calendars/<calendar_type>/months/<int:year>/<int:month>/working-days",
        methods=["GET"],
        endpoint="calendar_working_days",
    )
    def working_days(calendar_type: str, year: int, month: int):
        return ok(container.calendar_service.working_days_in_month(_scope(calendar_type), year, month))

    @app.route("/api/calendars/<calendar_type>/holidays/<int:year>", methods=["GET"], endpoint="calendar_holidays")
    def holidays(calendar_type: str, year: int):
        return ok(container.calendar_service.holidays_for_year(_scope(calendar_type), year))
