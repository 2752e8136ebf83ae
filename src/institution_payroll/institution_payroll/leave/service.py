from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..calendar_days.model import CalendarScope, scope_for, scope_for_employee
from ..calendar_days.service import CalendarService
from ..common.datetime_utils import now_local
from ..common.validators import require_date_range, require_non_empty
from ..core.constants import MAX_LEAVES_PER_MONTH
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..core.logging_config import get_logger
from ..employees.model import Employee
from .balance import apply_balance_on_approval, count_leave_days, split_paid_lop, spread_over_span
from .model import LeaveApplication
from .repository import LeaveRepository

logger = get_logger(__name__)


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        calendar: CalendarService,
        *,
        max_leaves_per_month: int = MAX_LEAVES_PER_MONTH,
    ):
        self._leaves = leaves
        self._calendar = calendar
        self._max_per_month = int(max_leaves_per_month)

    def _non_working_days(self, scope: CalendarScope, start: date, end: date) -> frozenset:
        """Weekends and holidays in the span; empty when the calendar cannot be read."""
        try:
            non_working = self._calendar.resolve(scope, start, end)
        except StorageError:
            logger.warning("calendar unavailable, counting all calendar days for %s..%s", start, end, exc_info=True)
            return frozenset()
        return non_working.weekends | non_working.holidays

    def count_days(self, employee: Employee, start: date, end: date) -> int:
        """Leave days in the span, excluding the employee's weekends and holidays."""
        return count_leave_days(start, end, self._non_working_days(scope_for_employee(employee), start, end))

    def apply_leave(
        self,
        employee: Employee,
        *,
        start_date: date,
        end_date: date,
        leave_type: LeaveType,
        reason: str,
    ) -> LeaveApplication:
        require_date_range(start_date, end_date)
        reason = require_non_empty(reason, "Reason")

        non_working = self._non_working_days(scope_for_employee(employee), start_date, end_date)
        working_days = count_leave_days(start_date, end_date, non_working)
        balance = self._leaves.get_balance(user_id=employee.user_id, year=start_date.year, month=start_date.month)
        used = self._leaves.used_paid_days_in_month(
            applicant_id=employee.user_id, year=start_date.year, month=start_date.month
        )
        working = split_paid_lop(working_days, balance, used_paid_days=used, max_per_month=self._max_per_month)
        split = spread_over_span(start_date, end_date, working, non_working)

        return self._leaves.create(
            {
                "applicant_id": employee.user_id,
                "applicant_name": employee.name,
                "applicant_type": employee.employee_type.value,
                "officer_id": employee.id if employee.is_officer else None,
                "institution_id": employee.institution_id,
                "start_date": start_date,
                "end_date": end_date,
                "leave_type": leave_type.value,
                "reason": reason,
                "total_days": split.total_days,
                "is_lop": split.is_lop,
                "paid_days": split.paid_days,
                "lop_days": split.lop_days,
                "paid_working_days": working.paid_days,
                "status": LeaveStatus.PENDING.value,
            }
        )

    def approve_leave(self, application_id: str, *, approver_id: str, user_type: str, now: Optional[datetime] = None) -> None:
        application = self._require_pending(application_id)
        self._leaves.decide(application_id, status=LeaveStatus.APPROVED, decided_by=approver_id, decided_at=now or now_local())

        balance = self._leaves.initialize_balance(
            user_id=application.applicant_id,
            user_type=user_type,
            year=application.start_date.year,
            month=application.start_date.month,
        )
        scope = scope_for(application.applicant_type or user_type, application.institution_id)
        days = count_leave_days(
            application.start_date,
            application.end_date,
            self._non_working_days(scope, application.start_date, application.end_date),
        )
        self._leaves.save_balance(apply_balance_on_approval(balance, application.leave_type, days))
        logger.info("leave %s approved by %s (%d days)", application_id, approver_id, days)

    def reject_leave(self, application_id: str, *, approver_id: str, reason: str, now: Optional[datetime] = None) -> None:
        self._require_pending(application_id)
        reason = require_non_empty(reason, "Rejection reason")
        self._leaves.decide(
            application_id,
            status=LeaveStatus.REJECTED,
            decided_by=approver_id,
            decided_at=now or now_local(),
            rejection_reason=reason,
        )

    def record_single_day_leave(
        self,
        employee: Employee,
        day: date,
        *,
        leave_type: LeaveType,
        is_lop: bool,
        reason: str,
        approved_by: str,
        now: Optional[datetime] = None,
    ) -> LeaveApplication:
        """Approved one-day leave created by an administrative correction."""
        return self._leaves.create(
            {
                "applicant_id": employee.user_id,
                "applicant_name": employee.name,
                "applicant_type": employee.employee_type.value,
                "officer_id": employee.id if employee.is_officer else None,
                "institution_id": employee.institution_id,
                "start_date": day,
                "end_date": day,
                "leave_type": leave_type.value,
                "reason": reason,
                "total_days": 1,
                "is_lop": is_lop,
                "paid_days": 0 if is_lop else 1,
                "lop_days": 1 if is_lop else 0,
                "paid_working_days": 0 if is_lop else 1,
                "status": LeaveStatus.APPROVED.value,
                "final_approved_by": approved_by,
                "final_approved_at": now or now_local(),
            }
        )

    def _require_pending(self, application_id: str) -> LeaveApplication:
        application = self._leaves.get(application_id)
        if not application:
            raise NotFoundError("Leave application not found")
        if application.status != LeaveStatus.PENDING:
            raise ValidationError("Leave application already decided")
        return application
