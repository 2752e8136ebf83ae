from __future__ import annotations

from ..core.enums import EmployeeType
from ..core.exceptions import NotFoundError
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def require(self, employee_type: EmployeeType, employee_id: str) -> Employee:
        employee = self._employees.get(employee_type, employee_id)
        if not employee:
            raise NotFoundError(f"{employee_type.value.capitalize()} {employee_id} not found")
        return employee
