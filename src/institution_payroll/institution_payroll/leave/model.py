from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    """An application spanning start_date..end_date inclusive.

    ``paid_days + lop_days == total_days`` counts calendar days of the span.
    Paid days are consumed first; the remaining days of the span are LOP.
    """

    id: str
    applicant_id: str
    start_date: date
    end_date: date
    leave_type: str
    paid_days: int
    lop_days: int
    status: LeaveStatus
    total_days: Optional[int] = None
    reason: Optional[str] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    applicant_type: Optional[str] = None
    institution_id: Optional[str] = None

    @property
    def span_days(self) -> int:
        return (self.end_date - self.start_date).days + 1


@dataclass(frozen=True)
class LeaveDay:
    leave_type: str
    application_id: str
    is_paid: bool


@dataclass(frozen=True)
class LeaveReconciliation:
    days: dict = field(default_factory=dict)
    # InconsistentLeaveOverlapError per date covered by more than one application
    overlaps: tuple = ()

    def get(self, day: date) -> Optional[LeaveDay]:
        return self.days.get(day)


@dataclass(frozen=True)
class LeaveBalance:
    id: Optional[str]
    user_id: str
    year: int
    month: int
    monthly_credit: int
    carried_forward: int
    casual_leave_used: int
    sick_leave_used: int
    balance_remaining: int

    @property
    def total_used(self) -> int:
        return self.casual_leave_used + self.sick_leave_used


@dataclass(frozen=True)
class LeaveSplit:
    total_days: int
    paid_days: int
    lop_days: int

    @property
    def is_lop(self) -> bool:
        return self.lop_days > 0
