from __future__ import annotations

from dataclasses import dataclass

from .rules.base import DayContext, DayRule
from .rules.calendar_rules import FutureDayRule, HolidayRule, LeaveRule, WeekendRule
from .rules.presence_rules import AttendanceRule, UnmarkedRule


@dataclass
class DayRuleFactory:
    """Factory Pattern: the ordered rule chain, first match wins."""

    def rules(self) -> tuple[DayRule, ...]:
        return (
            FutureDayRule(),
            WeekendRule(),
            HolidayRule(),
            LeaveRule(),
            AttendanceRule(),
            UnmarkedRule(),
        )

    def for_day(self, ctx: DayContext) -> DayRule:
        for rule in self.rules():
            if rule.applies(ctx):
                return rule
        return UnmarkedRule()
