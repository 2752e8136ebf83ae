from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ...core.enums import DayStatus, DayType
from ...leave.model import LeaveDay
from ..model import AttendanceRecord


@dataclass(frozen=True)
class DayContext:
    """All signals known about one calendar date."""

    day: date
    today: date
    attendance: Optional[AttendanceRecord] = None
    leave: Optional[LeaveDay] = None
    is_weekend: bool = False
    is_holiday: bool = False


@dataclass(frozen=True)
class DayDecision:
    day_type: DayType
    status: DayStatus


class DayRule(ABC):
    """Strategy Pattern: one step of the day classification precedence."""

    @abstractmethod
    def applies(self, ctx: DayContext) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, ctx: DayContext) -> DayDecision:
        raise NotImplementedError
