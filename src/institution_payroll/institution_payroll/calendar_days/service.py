from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import iter_days, month_bounds
from ..common.validators import require_date_range, require_month
from ..core.enums import CalendarDayKind
from ..core.exceptions import MissingScopeError
from ..core.logging_config import get_logger
from .model import CalendarDayEntry, CalendarScope, Holiday, NonWorkingDays
from .repository import CalendarRepository
from .resolver import resolve_non_working_days

logger = get_logger(__name__)


class CalendarService:
    def __init__(self, calendar: CalendarRepository):
        self._calendar = calendar

    def resolve(self, scope: CalendarScope, start: date, end: date) -> NonWorkingDays:
        """Weekend and holiday dates for the scope in [start, end].

        A missing institution id degrades to an empty calendar (every day is a
        working day) instead of failing. Storage errors propagate; the caller
        decides how to degrade.
        """
        require_date_range(start, end)
        try:
            entries = self._calendar.list_entries(
                scope, start=start, end=end, kinds=(CalendarDayKind.WEEKEND, CalendarDayKind.HOLIDAY)
            )
        except MissingScopeError as exc:
            logger.warning("calendar degraded to empty: %s", exc)
            return NonWorkingDays.empty()
        return resolve_non_working_days(entries, start, end)

    def set_day_type(
        self,
        scope: CalendarScope,
        day: date,
        kind: CalendarDayKind,
        *,
        description: Optional[str] = None,
    ) -> None:
        existing = self._calendar.find(scope, day)
        if existing and existing.id is not None:
            self._calendar.update(existing.id, kind=kind, description=description)
        else:
            self._calendar.insert(scope, [CalendarDayEntry(day=day, kind=kind, description=description)])

    def bulk_set_day_types(self, scope: CalendarScope, entries: Sequence[CalendarDayEntry]) -> None:
        if not entries:
            return
        self._calendar.delete(scope, [e.day for e in entries])
        self._calendar.insert(scope, list(entries))
        logger.info("calendar %s: %d day types replaced", scope.calendar_type.value, len(entries))

    def quick_setup_month(self, scope: CalendarScope, year: int, month: int) -> None:
        """Mark Saturdays and Sundays as weekend and the rest as working days."""
        require_month(year, month)
        start, end = month_bounds(year, month)
        entries = [
            CalendarDayEntry(
                day=d,
                kind=CalendarDayKind.WEEKEND if d.weekday() >= 5 else CalendarDayKind.WORKING,
            )
            for d in iter_days(start, end)
        ]
        self.bulk_set_day_types(scope, entries)

    def delete_day_type(self, scope: CalendarScope, day: date) -> None:
        self._calendar.delete(scope, [day])

    def working_days_in_month(self, scope: CalendarScope, year: int, month: int) -> list[date]:
        require_month(year, month)
        start, end = month_bounds(year, month)
        entries = self._calendar.list_entries(scope, start=start, end=end, kinds=(CalendarDayKind.WORKING,))
        return sorted(e.day for e in entries)

    def holidays_for_year(self, scope: CalendarScope, year: int) -> list[Holiday]:
        entries = self._calendar.list_entries(
            scope, start=date(year, 1, 1), end=date(year, 12, 31), kinds=(CalendarDayKind.HOLIDAY,)
        )
        return [Holiday(id=e.id, day=e.day, name=e.description or "Holiday") for e in sorted(entries, key=lambda e: e.day)]
