from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from ..common.money import ZERO, round_money, to_decimal
from ..core.enums import DayStatus, DayType, OvertimeStatus
from .model import AttendanceStats, DayRecord


def attendance_percentage(total_days_in_month: int, total_lop_days: int) -> Decimal:
    """Only LOP leave and unmarked days count against attendance.

    Paid leave, holidays and weekends keep the figure at 100.
    """
    if total_days_in_month <= 0:
        return Decimal("100.00")
    return round_money(Decimal((total_days_in_month - total_lop_days) * 100) / Decimal(total_days_in_month))


def aggregate(day_records: Iterable[DayRecord], total_days_in_month: int) -> AttendanceStats:
    records = list(day_records)

    working = weekend = holidays = leave = paid_leave = lop_leave = 0
    present = late = unmarked = pending_ot = 0
    total_hours = total_ot = approved_ot = ZERO

    for r in records:
        if r.day_type == DayType.WORKING and r.status != DayStatus.FUTURE:
            working += 1
        elif r.day_type == DayType.WEEKEND:
            weekend += 1
        elif r.day_type == DayType.HOLIDAY:
            holidays += 1
        elif r.day_type == DayType.LEAVE:
            leave += 1
            if r.is_paid_leave is True:
                paid_leave += 1
            elif r.is_paid_leave is False:
                lop_leave += 1

        if r.status in (DayStatus.PRESENT, DayStatus.LATE):
            present += 1
        if r.status == DayStatus.LATE:
            late += 1
        if r.status == DayStatus.UNMARKED:
            unmarked += 1

        hours = to_decimal(r.total_hours_worked or 0)
        overtime = to_decimal(r.overtime_hours or 0)
        total_hours += hours
        total_ot += overtime
        if r.overtime_status == OvertimeStatus.APPROVED:
            approved_ot += overtime
        elif r.overtime_status == OvertimeStatus.PENDING:
            pending_ot += 1

    # unmarked absences are paid the same as LOP leave
    total_lop = lop_leave + unmarked

    return AttendanceStats(
        total_days_in_month=total_days_in_month,
        working_days=working,
        weekend_days=weekend,
        holidays=holidays,
        leave_days=leave,
        paid_leave_days=paid_leave,
        lop_leave_days=lop_leave,
        present_days=present,
        late_days=late,
        unmarked_days=unmarked,
        total_lop_days=total_lop,
        total_hours=round_money(total_hours),
        total_overtime=round_money(total_ot),
        approved_overtime=round_money(approved_ot),
        pending_overtime_count=pending_ot,
        attendance_percentage=attendance_percentage(total_days_in_month, total_lop),
    )
