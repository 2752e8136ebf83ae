from __future__ import annotations

from ...core.enums import DayStatus, DayType
from .base import DayContext, DayDecision, DayRule


class AttendanceRule(DayRule):
    """Late wins over present; a row without a check-in token is not presence."""

    def applies(self, ctx: DayContext) -> bool:
        a = ctx.attendance
        return a is not None and (a.is_late_login or a.has_check_in)

    def decide(self, ctx: DayContext) -> DayDecision:
        status = DayStatus.LATE if ctx.attendance.is_late_login else DayStatus.PRESENT
        return DayDecision(day_type=DayType.WORKING, status=status)


class UnmarkedRule(DayRule):
    """Fallback: a past working day with nothing explaining the absence."""

    def applies(self, ctx: DayContext) -> bool:
        return True

    def decide(self, ctx: DayContext) -> DayDecision:
        return DayDecision(day_type=DayType.WORKING, status=DayStatus.UNMARKED)
