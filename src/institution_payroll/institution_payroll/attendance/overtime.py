from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.money import to_decimal
from .model import AttendanceRecord, MissingOvertime, OvertimeRequest


def find_missing_overtime_requests(
    attendance: Iterable[AttendanceRecord],
    existing: Iterable[OvertimeRequest],
) -> list[MissingOvertime]:
    """Attendance days with overtime hours but no overtime request.

    At most one entry per date, so persisting the result twice for the same
    inputs never yields two requests for one (person, date).
    """
    claimed: set[date] = {o.day for o in existing}
    missing: dict[date, MissingOvertime] = {}

    for a in attendance:
        hours = to_decimal(a.overtime_hours)
        if hours <= 0 or a.day in claimed:
            continue
        missing[a.day] = MissingOvertime(day=a.day, hours=hours)

    return [missing[d] for d in sorted(missing)]
