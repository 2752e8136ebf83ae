from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import CalendarDayKind
from .model import CalendarDayEntry, NonWorkingDays


def resolve_non_working_days(entries: Iterable[CalendarDayEntry], start: date, end: date) -> NonWorkingDays:
    """Split explicit calendar entries in [start, end] into weekend and holiday sets.

    Weekends are never inferred from the day of week; only stored entries count.
    A date carrying both a weekend and a holiday entry is reported as a holiday.
    """
    weekends: set[date] = set()
    holidays: set[date] = set()

    for entry in entries:
        if not (start <= entry.day <= end):
            continue
        if entry.kind == CalendarDayKind.HOLIDAY:
            holidays.add(entry.day)
        elif entry.kind == CalendarDayKind.WEEKEND:
            weekends.add(entry.day)

    return NonWorkingDays(weekends=frozenset(weekends - holidays), holidays=frozenset(holidays))
