from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import as_date
from ..core.enums import CalendarDayKind
from ..core.exceptions import MissingScopeError
from ..database.record_store import DateRange, RecordStore
from .model import CalendarDayEntry, CalendarScope, InstitutionScope

TABLE = "calendar_day_types"


class CalendarRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _scope_filters(scope: CalendarScope) -> dict:
        if isinstance(scope, InstitutionScope):
            if not scope.institution_id:
                raise MissingScopeError("Institution calendar requires an institution id")
            return {"calendar_type": scope.calendar_type.value, "institution_id": scope.institution_id}
        return {"calendar_type": scope.calendar_type.value, "institution_id": None}

    @staticmethod
    def _to_entry(r: dict) -> CalendarDayEntry:
        return CalendarDayEntry(
            day=as_date(r["date"]),
            kind=CalendarDayKind(r["day_type"]),
            description=r.get("description"),
            id=str(r["id"]) if r.get("id") is not None else None,
        )

    def list_entries(
        self,
        scope: CalendarScope,
        *,
        start: date,
        end: date,
        kinds: Optional[Iterable[CalendarDayKind]] = None,
    ) -> Sequence[CalendarDayEntry]:
        filters = self._scope_filters(scope)
        if kinds is not None:
            filters["day_type"] = [k.value for k in kinds]
        rows = self._store.query(TABLE, filters=filters, window=DateRange("date", start, end), order_by="date")
        return [self._to_entry(r) for r in rows]

    def find(self, scope: CalendarScope, day: date) -> Optional[CalendarDayEntry]:
        rows = self._store.query(TABLE, filters={**self._scope_filters(scope), "date": day})
        return self._to_entry(rows[0]) if rows else None

    def insert(self, scope: CalendarScope, entries: Sequence[CalendarDayEntry]) -> None:
        filters = self._scope_filters(scope)
        self._store.insert(
            TABLE,
            [
                {
                    "calendar_type": filters["calendar_type"],
                    "institution_id": filters["institution_id"],
                    "date": e.day,
                    "day_type": e.kind.value,
                    "description": e.description,
                }
                for e in entries
            ],
        )

    def update(self, entry_id: str, *, kind: CalendarDayKind, description: Optional[str]) -> None:
        self._store.update(TABLE, entry_id, {"day_type": kind.value, "description": description})

    def delete(self, scope: CalendarScope, days: Sequence[date]) -> int:
        if not days:
            return 0
        return self._store.delete(TABLE, filters={**self._scope_filters(scope), "date": list(days)})
