from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import iter_days
from ..core.exceptions import InconsistentLeaveOverlapError
from .model import LeaveApplication, LeaveDay, LeaveReconciliation


def reconcile_leaves(applications: Iterable[LeaveApplication]) -> LeaveReconciliation:
    """Expand approved applications into one LeaveDay per calendar date.

    Days are walked chronologically with a counter starting at 1 per
    application; a day is paid while ``counter <= paid_days`` so paid days are
    always the earliest ones. When two applications cover the same date the
    later one in iteration order wins and the clash is reported in ``overlaps``.
    """
    days: dict[date, LeaveDay] = {}
    owners: dict[date, list[str]] = {}

    for application in applications:
        paid_days = int(application.paid_days or 0)
        for counter, day in enumerate(iter_days(application.start_date, application.end_date), start=1):
            days[day] = LeaveDay(
                leave_type=application.leave_type,
                application_id=application.id,
                is_paid=counter <= paid_days,
            )
            owners.setdefault(day, []).append(application.id)

    overlaps = tuple(
        InconsistentLeaveOverlapError(day, ids) for day, ids in sorted(owners.items()) if len(ids) > 1
    )
    return LeaveReconciliation(days=days, overlaps=overlaps)
