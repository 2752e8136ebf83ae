from __future__ import annotations

from typing import Optional

from ..core.enums import EmployeeType
from ..database.record_store import RecordStore
from .model import Employee


class EmployeeRepository:
    """Reads officers and staff profiles into one Employee shape."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get(self, employee_type: EmployeeType, employee_id: str) -> Optional[Employee]:
        if employee_type == EmployeeType.OFFICER:
            rows = self._store.query("officers", filters={"id": employee_id})
            if not rows:
                return None
            r = rows[0]
            institutions = r.get("assigned_institutions") or []
            if isinstance(institutions, str):
                institutions = [i for i in institutions.split(",") if i]
            return Employee(
                id=str(r["id"]),
                user_id=str(r.get("user_id") or r["id"]),
                name=r.get("full_name") or "",
                employee_type=EmployeeType.OFFICER,
                employee_code=r.get("employee_id") or "",
                institution_id=institutions[0] if institutions else None,
                designation=r.get("designation"),
            )

        rows = self._store.query("profiles", filters={"id": employee_id})
        if not rows:
            return None
        r = rows[0]
        return Employee(
            id=str(r["id"]),
            user_id=str(r["id"]),
            name=r.get("name") or "",
            employee_type=EmployeeType.STAFF,
            employee_code=r.get("position_name") or "",
            institution_id=r.get("institution_id"),
            designation=r.get("designation") or r.get("position_name"),
        )
