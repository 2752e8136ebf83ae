from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..calendar_days.model import NonWorkingDays, scope_for_employee
from ..calendar_days.service import CalendarService
from ..common.datetime_utils import month_bounds, now_local
from ..common.money import ZERO, round_money
from ..common.validators import require_month, require_non_empty
from ..core.constants import STANDARD_WORK_HOURS
from ..core.enums import AttendanceToken, CorrectionKind, LeaveType, OvertimeStatus
from ..core.exceptions import NotFoundError, StorageError, ValidationError
from ..core.logging_config import get_logger
from ..employees.model import Employee
from ..leave.model import LeaveReconciliation
from ..leave.reconciler import reconcile_leaves
from ..leave.repository import LeaveRepository
from ..leave.service import LeaveService
from .aggregator import aggregate
from .classifier import classify_window
from .factory import DayRuleFactory
from .model import AttendanceRecord, MonthView, OvertimeRequest
from .overtime import find_missing_overtime_requests
from .repository import AttendanceRepository, OvertimeRepository

logger = get_logger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        overtime: OvertimeRepository,
        leaves: LeaveRepository,
        calendar: CalendarService,
        leave_service: LeaveService,
        *,
        standard_work_hours: Decimal = STANDARD_WORK_HOURS,
        rule_factory: Optional[DayRuleFactory] = None,
    ):
        self._attendance = attendance
        self._overtime = overtime
        self._leaves = leaves
        self._calendar = calendar
        self._leave_service = leave_service
        self._standard_hours = Decimal(str(standard_work_hours))
        self._rule_factory = rule_factory or DayRuleFactory()

    def backfill_overtime_requests(
        self,
        employee: Employee,
        attendance: Sequence[AttendanceRecord],
        existing: Sequence[OvertimeRequest],
    ) -> list[OvertimeRequest]:
        """Create pending requests for overtime nobody has claimed yet."""
        missing = find_missing_overtime_requests(attendance, existing)
        created = self._overtime.create_pending(employee, missing)
        if created:
            logger.info("created %d overtime requests for %s", len(created), employee.user_id)
        return created

    def build_month(self, employee: Employee, year: int, month: int, *, today: Optional[date] = None) -> MonthView:
        """Gather every input for the month, backfill overtime, then classify.

        The window runs from the first of the month to today or month end,
        whichever is earlier. A failed fetch degrades to an empty input and is
        reported in ``warnings`` so the rest of the month still renders.
        """
        require_month(year, month)
        today = today or now_local().date()
        start, month_end = month_bounds(year, month)
        end = min(month_end, today)
        warnings: list[str] = []

        def gather(what: str, fetch, default):
            try:
                return fetch()
            except StorageError:
                logger.exception("failed to load %s for %s", what, employee.user_id)
                warnings.append(f"Failed to load {what}")
                return default

        attendance: Sequence[AttendanceRecord] = []
        non_working = NonWorkingDays.empty()
        leaves = LeaveReconciliation()
        overtime: list[OvertimeRequest] = []
        created: list[OvertimeRequest] = []

        if end >= start:
            attendance = gather("attendance", lambda: self._attendance.list_for_range(employee, start, end), [])
            non_working = gather(
                "calendar",
                lambda: self._calendar.resolve(scope_for_employee(employee), start, end),
                NonWorkingDays.empty(),
            )
            applications = gather(
                "leave applications",
                lambda: self._leaves.list_approved_overlapping(applicant_id=employee.user_id, start=start, end=end),
                [],
            )
            overtime = list(
                gather("overtime requests", lambda: self._overtime.list_for_range(employee.user_id, start, end), [])
            )

            leaves = reconcile_leaves(applications)
            for overlap in leaves.overlaps:
                logger.warning("leave overlap for %s: %s", employee.user_id, overlap)
                warnings.append(str(overlap))

            created = gather("new overtime requests", lambda: self.backfill_overtime_requests(employee, attendance, overtime), [])
            overtime.extend(created)

        days = classify_window(
            start,
            end,
            today=today,
            attendance=attendance,
            non_working=non_working,
            leaves=leaves,
            overtime=overtime,
            factory=self._rule_factory,
        )
        return MonthView(
            employee=employee,
            year=year,
            month=month,
            days=tuple(days),
            stats=aggregate(days, (month_end - start).days + 1),
            overtime_created=len(created),
            warnings=tuple(warnings),
        )

    def correct_attendance(
        self,
        employee: Employee,
        day: date,
        *,
        check_in: datetime,
        check_out: datetime,
        reason: str,
        corrected_by: str,
    ) -> AttendanceRecord:
        reason = require_non_empty(reason, "Reason")
        if check_out < check_in:
            raise ValidationError("Check-out time cannot be before check-in time")

        hours = round_money(Decimal(str((check_out - check_in).total_seconds())) / Decimal(3600))
        overtime = round_money(max(ZERO, hours - self._standard_hours))

        existing = self._attendance.get_for_date(employee, day)
        self._attendance.save_correction(
            employee,
            existing,
            {
                "date": day,
                "check_in_time": check_in,
                "check_out_time": check_out,
                "total_hours_worked": hours,
                "overtime_hours": overtime,
                "is_manual_correction": True,
                "corrected_by": corrected_by,
                "correction_reason": reason,
                "status": AttendanceToken.CHECKED_OUT.value,
            },
        )
        self._attendance.log_correction(
            attendance_id=existing.id if existing else None,
            employee=employee,
            field_corrected="check_in_time, check_out_time",
            original_value=f"{_fmt(existing.check_in if existing else None)}, {_fmt(existing.check_out if existing else None)}",
            new_value=f"{_fmt(check_in)}, {_fmt(check_out)}",
            reason=reason,
            corrected_by=corrected_by,
        )
        logger.info("attendance corrected for %s on %s by %s", employee.user_id, day, corrected_by)

        return AttendanceRecord(
            id=existing.id if existing else None,
            day=day,
            check_in=check_in,
            check_out=check_out,
            total_hours_worked=hours,
            overtime_hours=overtime,
            is_manual_correction=True,
            status=AttendanceToken.CHECKED_OUT.value,
        )

    def mark_as_leave(
        self,
        employee: Employee,
        day: date,
        *,
        kind: CorrectionKind,
        reason: str,
        corrected_by: str,
    ) -> None:
        """Replace the day's attendance with a single-day approved leave."""
        if kind == CorrectionKind.PRESENT:
            raise ValidationError("Use an attendance correction to mark a day present")
        reason = require_non_empty(reason, "Reason")

        is_lop = kind == CorrectionKind.LOP
        leave_type = LeaveType.SICK if kind == CorrectionKind.SICK_LEAVE else LeaveType.CASUAL

        existing = self._attendance.get_for_date(employee, day)
        # leave first: a failed insert must leave the attendance row in place
        self._leave_service.record_single_day_leave(
            employee,
            day,
            leave_type=leave_type,
            is_lop=is_lop,
            reason=reason,
            approved_by=corrected_by,
        )
        if existing is not None:
            self._attendance.delete_for_date(employee, day)
        self._attendance.log_correction(
            attendance_id=existing.id if existing else None,
            employee=employee,
            field_corrected="leave_application",
            original_value="attendance" if existing else "none",
            new_value=f"{kind.value}:{leave_type.value}:{'lop' if is_lop else 'paid'}",
            reason=reason,
            corrected_by=corrected_by,
        )
        logger.info("%s on %s marked as %s by %s", employee.user_id, day, kind.value, corrected_by)

    def approve_overtime(self, overtime_id: str, *, approver_id: str, now: Optional[datetime] = None) -> None:
        self._require_overtime(overtime_id)
        self._overtime.decide(
            overtime_id, status=OvertimeStatus.APPROVED, decided_by=approver_id, decided_at=now or now_local()
        )

    def reject_overtime(
        self, overtime_id: str, *, approver_id: str, reason: str, now: Optional[datetime] = None
    ) -> None:
        reason = require_non_empty(reason, "Rejection reason")
        self._require_overtime(overtime_id)
        self._overtime.decide(
            overtime_id,
            status=OvertimeStatus.REJECTED,
            decided_by=approver_id,
            decided_at=now or now_local(),
            rejection_reason=reason,
        )

    def _require_overtime(self, overtime_id: str) -> OvertimeRequest:
        request = self._overtime.get(overtime_id)
        if not request:
            raise NotFoundError("Overtime request not found")
        return request


def _fmt(value: Optional[datetime]) -> str:
    return value.isoformat() if value else "null"
