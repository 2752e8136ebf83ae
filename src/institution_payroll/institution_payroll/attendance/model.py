from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..core.enums import AttendanceToken, DayStatus, DayType, OvertimeStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """One attendance row per (person, date).

    ``status`` is the raw token written at check-in/check-out; unknown tokens
    are kept as plain strings.
    """

    id: Optional[str]
    day: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_hours_worked: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None
    is_late_login: bool = False
    late_minutes: int = 0
    is_manual_correction: bool = False
    status: Optional[str] = None

    @property
    def has_check_in(self) -> bool:
        return self.status in (AttendanceToken.CHECKED_IN.value, AttendanceToken.CHECKED_OUT.value)


@dataclass(frozen=True)
class OvertimeRequest:
    id: Optional[str]
    user_id: str
    day: date
    requested_hours: Decimal
    status: OvertimeStatus
    reason: Optional[str] = None


@dataclass(frozen=True)
class MissingOvertime:
    """Overtime found on an attendance row that has no request yet."""

    day: date
    hours: Decimal


@dataclass(frozen=True)
class DayRecord:
    day: date
    day_type: DayType
    status: DayStatus
    attendance_id: Optional[str] = None
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    total_hours_worked: Optional[Decimal] = None
    is_late: bool = False
    late_minutes: int = 0
    is_manual_correction: bool = False
    leave_type: Optional[str] = None
    leave_id: Optional[str] = None
    is_paid_leave: Optional[bool] = None
    holiday_name: Optional[str] = None
    overtime_hours: Optional[Decimal] = None
    overtime_status: Optional[OvertimeStatus] = None
    overtime_id: Optional[str] = None

    @property
    def day_of_week(self) -> str:
        return self.day.strftime("%a")


@dataclass(frozen=True)
class AttendanceStats:
    total_days_in_month: int
    working_days: int = 0
    weekend_days: int = 0
    holidays: int = 0
    leave_days: int = 0
    paid_leave_days: int = 0
    lop_leave_days: int = 0
    present_days: int = 0
    late_days: int = 0
    unmarked_days: int = 0
    total_lop_days: int = 0
    total_hours: Decimal = ZERO
    total_overtime: Decimal = ZERO
    approved_overtime: Decimal = ZERO
    pending_overtime_count: int = 0
    attendance_percentage: Decimal = Decimal("100")


@dataclass(frozen=True)
class MonthView:
    """Everything the monthly attendance page shows for one employee."""

    employee: Employee
    year: int
    month: int
    days: tuple
    stats: AttendanceStats
    overtime_created: int = 0
    # human-readable notes about data that could not be loaded or was inconsistent
    warnings: tuple = ()
