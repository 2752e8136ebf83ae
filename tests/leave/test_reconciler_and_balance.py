from __future__ import annotations

from datetime import date

from institution_payroll.core.enums import LeaveStatus
from institution_payroll.leave.balance import (
    apply_balance_on_approval,
    count_leave_days,
    split_paid_lop,
    spread_over_span,
)
from institution_payroll.leave.model import LeaveApplication, LeaveBalance, LeaveSplit
from institution_payroll.leave.reconciler import reconcile_leaves


def _application(app_id, start, end, paid_days, lop_days=0, leave_type="casual"):
    return LeaveApplication(
        id=app_id,
        applicant_id="u1",
        start_date=start,
        end_date=end,
        leave_type=leave_type,
        paid_days=paid_days,
        lop_days=lop_days,
        status=LeaveStatus.APPROVED,
    )


def _balance(**overrides):
    values = dict(
        id="b1",
        user_id="u1",
        year=2025,
        month=6,
        monthly_credit=1,
        carried_forward=0,
        casual_leave_used=0,
        sick_leave_used=0,
        balance_remaining=1,
    )
    values.update(overrides)
    return LeaveBalance(**values)


def test_paid_days_are_the_earliest_days_of_the_span():
    result = reconcile_leaves([_application("a1", date(2025, 6, 2), date(2025, 6, 4), paid_days=2, lop_days=1)])

    assert [result.get(date(2025, 6, d)).is_paid for d in (2, 3, 4)] == [True, True, False]
    assert result.get(date(2025, 6, 5)) is None
    assert result.overlaps == ()


def test_overlapping_applications_last_one_wins_and_is_reported():
    result = reconcile_leaves(
        [
            _application("a1", date(2025, 6, 2), date(2025, 6, 4), paid_days=3),
            _application("a2", date(2025, 6, 4), date(2025, 6, 5), paid_days=0, lop_days=2, leave_type="sick"),
        ]
    )

    day = result.get(date(2025, 6, 4))
    assert day.application_id == "a2"
    assert day.is_paid is False
    assert day.leave_type == "sick"
    assert len(result.overlaps) == 1
    assert result.overlaps[0].day == date(2025, 6, 4)
    assert result.overlaps[0].application_ids == ("a1", "a2")


def test_count_leave_days_skips_weekends_and_holidays():
    days = count_leave_days(
        date(2025, 6, 6),
        date(2025, 6, 10),
        weekends=[date(2025, 6, 7), date(2025, 6, 8)],
        holidays=[date(2025, 6, 9)],
    )

    assert days == 2


def test_split_without_balance_is_fully_paid():
    split = split_paid_lop(3, None)

    assert (split.paid_days, split.lop_days, split.is_lop) == (3, 0, False)


def test_split_is_capped_by_balance_and_monthly_maximum():
    assert split_paid_lop(3, _balance(balance_remaining=5), max_per_month=2).paid_days == 2
    assert split_paid_lop(3, _balance(balance_remaining=1)).paid_days == 1

    split = split_paid_lop(3, _balance(balance_remaining=2), used_paid_days=1)
    assert (split.paid_days, split.lop_days) == (1, 2)


def test_split_never_goes_negative():
    split = split_paid_lop(2, _balance(casual_leave_used=3, balance_remaining=0), used_paid_days=4)

    assert (split.paid_days, split.lop_days) == (0, 2)


def test_approval_updates_used_counters_and_remaining():
    casual = apply_balance_on_approval(_balance(carried_forward=2), "casual", 2)
    sick = apply_balance_on_approval(_balance(), "sick", 3)

    assert (casual.casual_leave_used, casual.balance_remaining) == (2, 1)
    assert (sick.sick_leave_used, sick.balance_remaining) == (3, 0)


WEEKEND = [date(2025, 6, 7), date(2025, 6, 8)]


def test_fully_paid_split_covers_the_whole_span():
    split = spread_over_span(date(2025, 6, 6), date(2025, 6, 10), LeaveSplit(3, 3, 0), WEEKEND)

    assert (split.total_days, split.paid_days, split.lop_days) == (5, 5, 0)


def test_paid_working_days_are_placed_before_lop_in_the_span():
    # Fri paid, Sat and Sun fall before Mon (paid), Tue is LOP
    split = spread_over_span(date(2025, 6, 6), date(2025, 6, 10), LeaveSplit(3, 2, 1), WEEKEND)

    assert (split.total_days, split.paid_days, split.lop_days, split.is_lop) == (5, 4, 1, True)
    reconciled = reconcile_leaves([_application("a1", date(2025, 6, 6), date(2025, 6, 10), split.paid_days, split.lop_days)])
    assert [reconciled.get(date(2025, 6, d)).is_paid for d in (6, 9, 10)] == [True, True, False]


def test_unpaid_split_is_lop_across_the_span():
    split = spread_over_span(date(2025, 6, 6), date(2025, 6, 10), LeaveSplit(3, 0, 3), WEEKEND)

    assert (split.paid_days, split.lop_days) == (0, 5)
