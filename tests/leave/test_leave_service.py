from __future__ import annotations

from datetime import date, datetime

import pytest

from institution_payroll.calendar_days.model import CompanyScope
from institution_payroll.core.enums import LeaveStatus, LeaveType
from institution_payroll.core.exceptions import (
    InvalidRangeError,
    NotFoundError,
    ValidationError,
)

NOW = datetime(2025, 6, 1, 9, 0)


def test_apply_leave_splits_the_whole_span(container, staff, store):
    container.calendar_service.quick_setup_month(CompanyScope(), 2025, 6)

    # Fri 6th to Tue 10th spans one weekend
    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 6), end_date=date(2025, 6, 10), leave_type=LeaveType.CASUAL, reason="Travel"
    )

    assert application.total_days == 5
    assert application.status == LeaveStatus.PENDING
    assert (application.paid_days, application.lop_days) == (5, 0)
    row = store.rows("leave_applications")[0]
    assert row["applicant_id"] == "s1"
    assert row["applicant_type"] == "staff"


def test_apply_leave_splits_against_existing_balance(container, staff, store):
    store.tables["leave_balances"] = [
        {
            "id": "b1",
            "user_id": "s1",
            "year": 2025,
            "month": 6,
            "monthly_credit": 1,
            "carried_forward": 0,
            "casual_leave_used": 0,
            "sick_leave_used": 0,
            "balance_remaining": 1,
        }
    ]

    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 2), end_date=date(2025, 6, 4), leave_type=LeaveType.CASUAL, reason="Family"
    )

    assert (application.paid_days, application.lop_days) == (1, 2)
    assert store.rows("leave_applications")[0]["is_lop"] is True


def test_leave_day_count_falls_back_when_calendar_is_unavailable(container, staff, store):
    store.failing.add("calendar_day_types")

    days = container.leave_service.count_days(staff, date(2025, 6, 6), date(2025, 6, 10))

    assert days == 5


def test_apply_leave_validates_input(container, staff):
    with pytest.raises(InvalidRangeError):
        container.leave_service.apply_leave(
            staff, start_date=date(2025, 6, 5), end_date=date(2025, 6, 4), leave_type=LeaveType.CASUAL, reason="x"
        )
    with pytest.raises(ValidationError):
        container.leave_service.apply_leave(
            staff, start_date=date(2025, 6, 4), end_date=date(2025, 6, 4), leave_type=LeaveType.CASUAL, reason="  "
        )


def test_approve_leave_creates_balance_and_records_approver(container, staff, store):
    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 2), end_date=date(2025, 6, 3), leave_type=LeaveType.SICK, reason="Flu"
    )

    container.leave_service.approve_leave(application.id, approver_id="admin-1", user_type="staff", now=NOW)

    row = store.rows("leave_applications", id=application.id)[0]
    assert row["status"] == "approved"
    assert row["final_approved_by"] == "admin-1"
    assert row["final_approved_at"] == NOW
    balance = store.rows("leave_balances", user_id="s1")[0]
    assert balance["sick_leave_used"] == 2
    assert balance["balance_remaining"] == 0


def test_decided_application_cannot_be_decided_again(container, staff):
    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 2), end_date=date(2025, 6, 2), leave_type=LeaveType.CASUAL, reason="Errand"
    )
    container.leave_service.reject_leave(application.id, approver_id="admin-1", reason="Busy week", now=NOW)

    with pytest.raises(ValidationError):
        container.leave_service.approve_leave(application.id, approver_id="admin-1", user_type="staff", now=NOW)


def test_reject_requires_reason_and_known_application(container, staff):
    with pytest.raises(NotFoundError):
        container.leave_service.reject_leave("missing", approver_id="admin-1", reason="No", now=NOW)

    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 2), end_date=date(2025, 6, 2), leave_type=LeaveType.CASUAL, reason="Errand"
    )
    with pytest.raises(ValidationError):
        container.leave_service.reject_leave(application.id, approver_id="admin-1", reason="", now=NOW)


def _june_balance(store, remaining):
    store.tables["leave_balances"] = [
        {
            "id": "b1",
            "user_id": "s1",
            "year": 2025,
            "month": 6,
            "monthly_credit": remaining,
            "carried_forward": 0,
            "casual_leave_used": 0,
            "sick_leave_used": 0,
            "balance_remaining": remaining,
        }
    ]


def test_limited_balance_is_spent_on_working_days_only(container, staff, store):
    container.calendar_service.quick_setup_month(CompanyScope(), 2025, 6)
    _june_balance(store, 2)

    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 6), end_date=date(2025, 6, 10), leave_type=LeaveType.CASUAL, reason="Travel"
    )
    container.leave_service.approve_leave(application.id, approver_id="admin-1", user_type="staff", now=NOW)

    assert (application.total_days, application.paid_days, application.lop_days) == (5, 4, 1)
    stats = container.attendance_service.build_month(staff, 2025, 6, today=date(2025, 6, 10)).stats
    assert (stats.paid_leave_days, stats.lop_leave_days) == (2, 1)


def test_leave_over_a_weekend_stays_paid_in_the_month_view(container, staff, store):
    container.calendar_service.quick_setup_month(CompanyScope(), 2025, 6)

    application = container.leave_service.apply_leave(
        staff, start_date=date(2025, 6, 6), end_date=date(2025, 6, 10), leave_type=LeaveType.CASUAL, reason="Travel"
    )
    container.leave_service.approve_leave(application.id, approver_id="admin-1", user_type="staff", now=NOW)

    stats = container.attendance_service.build_month(staff, 2025, 6, today=date(2025, 6, 10)).stats
    assert (stats.paid_leave_days, stats.lop_leave_days) == (3, 0)
    # only Mon 2nd to Thu 5th are missing
    assert stats.unmarked_days == 4
    assert stats.total_lop_days == 4
    # the balance is charged for working days, not the weekend
    assert store.rows("leave_balances", user_id="s1")[0]["casual_leave_used"] == 3
