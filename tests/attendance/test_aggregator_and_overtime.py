from __future__ import annotations

from datetime import date
from decimal import Decimal

from institution_payroll.attendance.aggregator import aggregate, attendance_percentage
from institution_payroll.attendance.model import AttendanceRecord, DayRecord, OvertimeRequest
from institution_payroll.attendance.overtime import find_missing_overtime_requests
from institution_payroll.core.enums import DayStatus, DayType, OvertimeStatus


def _day(d, day_type, status, **extra):
    return DayRecord(day=date(2025, 6, d), day_type=day_type, status=status, **extra)


def test_three_lop_days_in_thirty_is_ninety_percent():
    assert attendance_percentage(30, 3) == Decimal("90.00")


def test_percentage_is_full_for_empty_month():
    assert attendance_percentage(0, 0) == Decimal("100.00")


def test_paid_leave_keeps_attendance_at_hundred():
    records = [_day(d, DayType.LEAVE, DayStatus.LEAVE, is_paid_leave=True) for d in range(1, 31)]

    stats = aggregate(records, 30)

    assert stats.leave_days == 30
    assert stats.paid_leave_days == 30
    assert stats.total_lop_days == 0
    assert stats.attendance_percentage == Decimal("100.00")


def test_aggregate_counts_each_bucket():
    records = [
        _day(1, DayType.WEEKEND, DayStatus.WEEKEND),
        _day(2, DayType.WORKING, DayStatus.PRESENT, total_hours_worked=Decimal("9.5"),
             overtime_hours=Decimal("1.5"), overtime_status=OvertimeStatus.APPROVED),
        _day(3, DayType.WORKING, DayStatus.LATE, total_hours_worked=Decimal("8"),
             overtime_hours=Decimal("2"), overtime_status=OvertimeStatus.PENDING),
        _day(4, DayType.HOLIDAY, DayStatus.HOLIDAY),
        _day(5, DayType.LEAVE, DayStatus.LEAVE, is_paid_leave=True),
        _day(6, DayType.LEAVE, DayStatus.LEAVE, is_paid_leave=False),
        _day(7, DayType.WORKING, DayStatus.UNMARKED),
        _day(8, DayType.WORKING, DayStatus.FUTURE),
    ]

    stats = aggregate(records, 30)

    assert stats.working_days == 3
    assert (stats.weekend_days, stats.holidays) == (1, 1)
    assert (stats.leave_days, stats.paid_leave_days, stats.lop_leave_days) == (2, 1, 1)
    assert (stats.present_days, stats.late_days, stats.unmarked_days) == (2, 1, 1)
    assert stats.total_lop_days == 2
    assert stats.total_hours == Decimal("17.50")
    assert stats.total_overtime == Decimal("3.50")
    assert stats.approved_overtime == Decimal("1.50")
    assert stats.pending_overtime_count == 1
    assert stats.attendance_percentage == Decimal("93.33")


def test_missing_overtime_skips_claimed_days_and_zero_hours():
    attendance = [
        AttendanceRecord(id="a3", day=date(2025, 6, 3), overtime_hours=Decimal("1")),
        AttendanceRecord(id="a2", day=date(2025, 6, 2), overtime_hours=Decimal("2")),
        AttendanceRecord(id="a4", day=date(2025, 6, 4), overtime_hours=Decimal("0")),
        AttendanceRecord(id="a5", day=date(2025, 6, 5)),
    ]
    existing = [
        OvertimeRequest(id="o1", user_id="u1", day=date(2025, 6, 3), requested_hours=Decimal("1"),
                        status=OvertimeStatus.REJECTED),
    ]

    missing = find_missing_overtime_requests(attendance, existing)

    assert [(m.day, m.hours) for m in missing] == [(date(2025, 6, 2), Decimal("2"))]


def test_missing_overtime_is_one_per_date():
    attendance = [
        AttendanceRecord(id="a1", day=date(2025, 6, 2), overtime_hours=Decimal("1")),
        AttendanceRecord(id="a2", day=date(2025, 6, 2), overtime_hours=Decimal("3")),
    ]

    assert len(find_missing_overtime_requests(attendance, [])) == 1
