from __future__ import annotations

from datetime import date

import pytest

from institution_payroll.calendar_days.model import (
    CalendarDayEntry,
    CompanyScope,
    InstitutionScope,
)
from institution_payroll.calendar_days.resolver import resolve_non_working_days
from institution_payroll.core.enums import CalendarDayKind
from institution_payroll.core.exceptions import InvalidRangeError, ValidationError


def test_resolver_prefers_holiday_over_weekend_and_ignores_out_of_range():
    entries = [
        CalendarDayEntry(day=date(2025, 6, 7), kind=CalendarDayKind.WEEKEND),
        CalendarDayEntry(day=date(2025, 6, 7), kind=CalendarDayKind.HOLIDAY),
        CalendarDayEntry(day=date(2025, 6, 8), kind=CalendarDayKind.WEEKEND),
        CalendarDayEntry(day=date(2025, 6, 9), kind=CalendarDayKind.WORKING),
        CalendarDayEntry(day=date(2025, 7, 1), kind=CalendarDayKind.HOLIDAY),
    ]

    result = resolve_non_working_days(entries, date(2025, 6, 1), date(2025, 6, 30))

    assert result.holidays == frozenset({date(2025, 6, 7)})
    assert result.weekends == frozenset({date(2025, 6, 8)})


def test_weekends_are_never_inferred_from_day_of_week(container):
    # 2025-06-07 is a Saturday but nothing is stored for it
    result = container.calendar_service.resolve(CompanyScope(), date(2025, 6, 1), date(2025, 6, 30))

    assert not result.weekends
    assert not result.holidays


def test_quick_setup_marks_saturdays_and_sundays(container):
    service = container.calendar_service
    service.quick_setup_month(CompanyScope(), 2025, 6)

    result = service.resolve(CompanyScope(), date(2025, 6, 1), date(2025, 6, 30))
    assert len(result.weekends) == 9
    assert all(d.weekday() >= 5 for d in result.weekends)
    assert len(service.working_days_in_month(CompanyScope(), 2025, 6)) == 21


def test_quick_setup_twice_does_not_duplicate_rows(container, store):
    container.calendar_service.quick_setup_month(CompanyScope(), 2025, 6)
    container.calendar_service.quick_setup_month(CompanyScope(), 2025, 6)

    assert len(store.rows("calendar_day_types")) == 30


def test_set_day_type_overwrites_existing_entry(container, store):
    service = container.calendar_service
    service.quick_setup_month(CompanyScope(), 2025, 6)
    service.set_day_type(CompanyScope(), date(2025, 6, 10), CalendarDayKind.HOLIDAY, description="Founders Day")

    assert len(store.rows("calendar_day_types", date=date(2025, 6, 10))) == 1
    holidays = service.holidays_for_year(CompanyScope(), 2025)
    assert [(h.day, h.name) for h in holidays] == [(date(2025, 6, 10), "Founders Day")]
    assert len(service.working_days_in_month(CompanyScope(), 2025, 6)) == 20


def test_institution_calendars_are_isolated(container):
    service = container.calendar_service
    service.set_day_type(InstitutionScope("inst-1"), date(2025, 6, 10), CalendarDayKind.HOLIDAY)

    other = service.resolve(InstitutionScope("inst-2"), date(2025, 6, 1), date(2025, 6, 30))
    company = service.resolve(CompanyScope(), date(2025, 6, 1), date(2025, 6, 30))
    mine = service.resolve(InstitutionScope("inst-1"), date(2025, 6, 1), date(2025, 6, 30))

    assert not other.holidays
    assert not company.holidays
    assert mine.holidays == frozenset({date(2025, 6, 10)})


def test_institution_scope_without_id_degrades_to_empty(container):
    result = container.calendar_service.resolve(InstitutionScope(None), date(2025, 6, 1), date(2025, 6, 30))

    assert result.weekends == frozenset()
    assert result.holidays == frozenset()


def test_resolve_rejects_inverted_range(container):
    with pytest.raises(InvalidRangeError):
        container.calendar_service.resolve(CompanyScope(), date(2025, 6, 30), date(2025, 6, 1))


def test_quick_setup_rejects_invalid_month(container):
    with pytest.raises(ValidationError):
        container.calendar_service.quick_setup_month(CompanyScope(), 2025, 13)
