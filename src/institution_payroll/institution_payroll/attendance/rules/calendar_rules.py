from __future__ import annotations

from ...core.enums import DayStatus, DayType
from .base import DayContext, DayDecision, DayRule


class FutureDayRule(DayRule):
    def applies(self, ctx: DayContext) -> bool:
        return ctx.day > ctx.today

    def decide(self, ctx: DayContext) -> DayDecision:
        return DayDecision(day_type=DayType.WORKING, status=DayStatus.FUTURE)


class WeekendRule(DayRule):
    def applies(self, ctx: DayContext) -> bool:
        return ctx.is_weekend

    def decide(self, ctx: DayContext) -> DayDecision:
        return DayDecision(day_type=DayType.WEEKEND, status=DayStatus.WEEKEND)


class HolidayRule(DayRule):
    def applies(self, ctx: DayContext) -> bool:
        return ctx.is_holiday

    def decide(self, ctx: DayContext) -> DayDecision:
        return DayDecision(day_type=DayType.HOLIDAY, status=DayStatus.HOLIDAY)


class LeaveRule(DayRule):
    def applies(self, ctx: DayContext) -> bool:
        return ctx.leave is not None

    def decide(self, ctx: DayContext) -> DayDecision:
        return DayDecision(day_type=DayType.LEAVE, status=DayStatus.LEAVE)
