from __future__ import annotations

from enum import Enum


class EmployeeType(str, Enum):
    """Officers follow an institution calendar, staff the company calendar."""

    OFFICER = "officer"
    STAFF = "staff"


class CalendarType(str, Enum):
    INSTITUTION = "institution"
    COMPANY = "company"


class CalendarDayKind(str, Enum):
    """Values stored in calendar_day_types.day_type."""

    WORKING = "working"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"


class DayType(str, Enum):
    WORKING = "working"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    LEAVE = "leave"


class DayStatus(str, Enum):
    PRESENT = "present"
    LATE = "late"
    UNMARKED = "unmarked"
    HOLIDAY = "holiday"
    WEEKEND = "weekend"
    LEAVE = "leave"
    FUTURE = "future"


class AttendanceToken(str, Enum):
    """Raw status token written by check-in/check-out."""

    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    ABSENT = "absent"


class OvertimeStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"


class CorrectionKind(str, Enum):
    """What an administrator turns a day into from the correction dialog."""

    PRESENT = "present"
    PAID_LEAVE = "paid_leave"
    LOP = "lop"
    SICK_LEAVE = "leave"


class InvoiceType(str, Enum):
    SALES = "sales"
    PURCHASE = "purchase"


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    ISSUED = "issued"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    CANCELLED = "cancelled"
