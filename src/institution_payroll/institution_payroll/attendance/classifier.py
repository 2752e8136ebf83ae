"""Per-date classification of attendance, calendar and leave signals.

Everything here is pure: the caller gathers rows for the window first and
classification never reads or writes storage.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..calendar_days.model import NonWorkingDays
from ..common.datetime_utils import iter_days
from ..leave.model import LeaveDay, LeaveReconciliation
from .factory import DayRuleFactory
from .model import AttendanceRecord, DayRecord, OvertimeRequest
from .rules.base import DayContext

_default_factory = DayRuleFactory()


def classify(
    day: date,
    *,
    today: date,
    attendance: Optional[AttendanceRecord] = None,
    leave: Optional[LeaveDay] = None,
    is_weekend: bool = False,
    is_holiday: bool = False,
    overtime: Optional[OvertimeRequest] = None,
    factory: Optional[DayRuleFactory] = None,
) -> DayRecord:
    ctx = DayContext(
        day=day,
        today=today,
        attendance=attendance,
        leave=leave,
        is_weekend=is_weekend,
        is_holiday=is_holiday,
    )
    decision = (factory or _default_factory).for_day(ctx).decide(ctx)

    # requested hours win, the raw attendance figure is the fallback
    overtime_hours = None
    if overtime is not None and overtime.requested_hours:
        overtime_hours = overtime.requested_hours
    elif attendance is not None and attendance.overtime_hours:
        overtime_hours = attendance.overtime_hours

    return DayRecord(
        day=day,
        day_type=decision.day_type,
        status=decision.status,
        attendance_id=attendance.id if attendance else None,
        check_in=attendance.check_in if attendance else None,
        check_out=attendance.check_out if attendance else None,
        total_hours_worked=attendance.total_hours_worked if attendance else None,
        is_late=bool(attendance and attendance.is_late_login),
        late_minutes=attendance.late_minutes if attendance else 0,
        is_manual_correction=bool(attendance and attendance.is_manual_correction),
        leave_type=leave.leave_type if leave else None,
        leave_id=leave.application_id if leave else None,
        is_paid_leave=leave.is_paid if leave else None,
        holiday_name="Holiday" if is_holiday else None,
        overtime_hours=overtime_hours,
        overtime_status=overtime.status if overtime else None,
        overtime_id=overtime.id if overtime else None,
    )


def classify_window(
    start: date,
    end: date,
    *,
    today: date,
    attendance: Iterable[AttendanceRecord] = (),
    non_working: Optional[NonWorkingDays] = None,
    leaves: Optional[LeaveReconciliation] = None,
    overtime: Iterable[OvertimeRequest] = (),
    factory: Optional[DayRuleFactory] = None,
) -> list[DayRecord]:
    """One DayRecord per date in [start, end]; empty when end < start.

    When several rows exist for the same date the last one wins.
    """
    non_working = non_working or NonWorkingDays.empty()
    leaves = leaves or LeaveReconciliation()
    attendance_by_day = {a.day: a for a in attendance}
    overtime_by_day = {o.day: o for o in overtime}

    return [
        classify(
            d,
            today=today,
            attendance=attendance_by_day.get(d),
            leave=leaves.get(d),
            is_weekend=non_working.is_weekend(d),
            is_holiday=non_working.is_holiday(d),
            overtime=overtime_by_day.get(d),
            factory=factory,
        )
        for d in iter_days(start, end)
    ]
