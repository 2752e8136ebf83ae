from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeType


@dataclass(frozen=True)
class Employee:
    """An officer (institution-assigned) or a company staff member.

    ``id`` is the officer row id for officers and the profile id for staff;
    ``user_id`` is the login id that leave and overtime rows are keyed on.
    """

    id: str
    user_id: str
    name: str
    employee_type: EmployeeType
    employee_code: str = ""
    institution_id: Optional[str] = None
    designation: Optional[str] = None

    @property
    def is_officer(self) -> bool:
        return self.employee_type == EmployeeType.OFFICER
