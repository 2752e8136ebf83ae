"""Leave day counting and paid/LOP apportionment at application time."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_days
from ..core.constants import MAX_LEAVES_PER_MONTH
from ..core.enums import LeaveType
from .model import LeaveBalance, LeaveSplit


def count_leave_days(start: date, end: date, weekends: Iterable[date] = (), holidays: Iterable[date] = ()) -> int:
    """Calendar days in the span that are neither weekend nor holiday."""
    non_working = set(weekends) | set(holidays)
    return sum(1 for d in iter_days(start, end) if d not in non_working)


def split_paid_lop(
    total_days: int,
    balance: Optional[LeaveBalance],
    *,
    used_paid_days: int = 0,
    max_per_month: int = MAX_LEAVES_PER_MONTH,
) -> LeaveSplit:
    if balance is None:
        return LeaveSplit(total_days=total_days, paid_days=total_days, lop_days=0)

    base_available = min(balance.balance_remaining, max_per_month - balance.total_used)
    available = max(0, base_available - used_paid_days)

    paid = min(total_days, available)
    return LeaveSplit(total_days=total_days, paid_days=paid, lop_days=total_days - paid)


def spread_over_span(start: date, end: date, split: LeaveSplit, non_working: Iterable[date] = ()) -> LeaveSplit:
    """Restate a split of working days as a split of the calendar span.

    Paid days are counted from the start of the span, so weekend and holiday
    dates up to the last paid working day count as paid. With no LOP the
    whole span is paid.
    """
    span = list(iter_days(start, end))
    if split.lop_days <= 0:
        return LeaveSplit(total_days=len(span), paid_days=len(span), lop_days=0)

    skip = set(non_working)
    remaining = split.paid_days
    paid = 0
    for position, day in enumerate(span, start=1):
        if remaining <= 0:
            break
        if day not in skip:
            remaining -= 1
            paid = position
    return LeaveSplit(total_days=len(span), paid_days=paid, lop_days=len(span) - paid)


def apply_balance_on_approval(balance: LeaveBalance, leave_type: str, days: int) -> LeaveBalance:
    if leave_type == LeaveType.SICK.value:
        updated = replace(balance, sick_leave_used=balance.sick_leave_used + days)
    else:
        updated = replace(balance, casual_leave_used=balance.casual_leave_used + days)

    available = balance.monthly_credit + balance.carried_forward
    return replace(updated, balance_remaining=max(0, available - updated.total_used))
