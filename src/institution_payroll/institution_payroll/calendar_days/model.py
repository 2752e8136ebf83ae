from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from ..core.enums import CalendarDayKind, CalendarType, EmployeeType
from ..employees.model import Employee


@dataclass(frozen=True)
class InstitutionScope:
    """Calendar of one institution; used for officers."""

    institution_id: Optional[str]

    @property
    def calendar_type(self) -> CalendarType:
        return CalendarType.INSTITUTION


@dataclass(frozen=True)
class CompanyScope:
    """Company-wide calendar; used for staff."""

    @property
    def calendar_type(self) -> CalendarType:
        return CalendarType.COMPANY


CalendarScope = Union[InstitutionScope, CompanyScope]


def scope_for(employee_type: str, institution_id: Optional[str] = None) -> CalendarScope:
    if employee_type == EmployeeType.OFFICER.value:
        return InstitutionScope(institution_id)
    return CompanyScope()


def scope_for_employee(employee: Employee) -> CalendarScope:
    return scope_for(employee.employee_type.value, employee.institution_id)


@dataclass(frozen=True)
class CalendarDayEntry:
    day: date
    kind: CalendarDayKind
    description: Optional[str] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class NonWorkingDays:
    weekends: frozenset = field(default_factory=frozenset)
    holidays: frozenset = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> "NonWorkingDays":
        return cls()

    def is_weekend(self, day: date) -> bool:
        return day in self.weekends

    def is_holiday(self, day: date) -> bool:
        return day in self.holidays


@dataclass(frozen=True)
class Holiday:
    id: Optional[str]
    day: date
    name: str
