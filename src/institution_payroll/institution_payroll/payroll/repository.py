from __future__ import annotations

import json
from typing import Optional

from ..database.record_store import RecordStore
from ..employees.model import Employee
from .model import PayrollConfig, SalaryStructure, StatutoryInfo

CONFIG_TABLE = "system_configurations"
PAYROLL_CONFIG_KEY = "company_payroll_config"


class SalaryRepository:
    def __init__(self, store: RecordStore):
        self._store = store

    @staticmethod
    def _table(employee: Employee) -> str:
        return "officers" if employee.is_officer else "profiles"

    def get_salary_row(self, employee: Employee) -> Optional[dict]:
        rows = self._store.query(self._table(employee), filters={"id": employee.id})
        return rows[0] if rows else None

    def save_salary(
        self,
        employee: Employee,
        structure: SalaryStructure,
        statutory: StatutoryInfo,
        *,
        designation: Optional[str] = None,
    ) -> None:
        patch = {
            "salary_structure": json.dumps(structure.to_dict()),
            "statutory_info": json.dumps(statutory.to_dict()),
        }
        if designation is not None:
            patch["designation"] = designation
        self._store.update(self._table(employee), employee.id, patch)

    def get_payroll_config(self, defaults: PayrollConfig) -> PayrollConfig:
        rows = self._store.query(CONFIG_TABLE, filters={"key": PAYROLL_CONFIG_KEY})
        if not rows:
            return defaults
        value = rows[0].get("value")
        if isinstance(value, (bytes, str)):
            value = json.loads(value)
        return PayrollConfig.from_dict(value, base=defaults)
