from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

import pytest

from institution_payroll.container import build_container_from_store
from institution_payroll.core.enums import EmployeeType
from institution_payroll.core.exceptions import StorageError
from institution_payroll.database.record_store import filter_matches


class InMemoryRecordStore:
    """Same contract as MySQLRecordStore, rows kept in dicts.

    Ids are strings so lookups by a URL path segment behave like MySQL's
    implicit conversion. Tables listed in ``failing`` raise StorageError.
    """

    def __init__(self, tables: Optional[Mapping[str, Sequence[dict]]] = None):
        self.tables: dict[str, list[dict]] = {name: [dict(r) for r in rows] for name, rows in (tables or {}).items()}
        self.failing: set[str] = set()
        self._next_id = 1

    def _check(self, table: str) -> None:
        if table in self.failing:
            raise StorageError(f"{table} unavailable", table=table)

    def query(self, table, *, filters=None, window=None, order_by=None) -> list[dict]:
        self._check(table)
        rows = [
            dict(r)
            for r in self.tables.get(table, [])
            if filter_matches(r, filters or {}) and (window is None or window.matches(r))
        ]
        if order_by:
            rows.sort(key=lambda r: (r.get(order_by) is None, r.get(order_by)))
        return rows

    def insert(self, table, rows) -> list[dict]:
        self._check(table)
        inserted = []
        for row in rows:
            record = dict(row)
            if record.get("id") is None:
                record["id"] = str(self._next_id)
                self._next_id += 1
            self.tables.setdefault(table, []).append(record)
            inserted.append(dict(record))
        return inserted

    def insert_unique(self, table, rows, *, key) -> list[dict]:
        self._check(table)
        stored = []
        for row in rows:
            match = {k: row[k] for k in key}
            existing = self.rows(table, **match)
            if existing:
                stored.extend(dict(r) for r in existing)
            else:
                stored.extend(self.insert(table, [row]))
        return stored

    def update(self, table, record_id, patch) -> None:
        self._check(table)
        for row in self.tables.get(table, []):
            if str(row.get("id")) == str(record_id):
                row.update(patch)

    def delete(self, table, *, filters) -> int:
        self._check(table)
        before = self.tables.get(table, [])
        kept = [r for r in before if not filter_matches(r, filters)]
        self.tables[table] = kept
        return len(before) - len(kept)

    def rows(self, table: str, **filters: Any) -> list[dict]:
        return [r for r in self.tables.get(table, []) if filter_matches(r, filters)]


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore(
        {
            "officers": [
                {
                    "id": "o1",
                    "user_id": "u-o1",
                    "full_name": "Asha Rao",
                    "employee_id": "OFF-001",
                    "designation": "Field Officer",
                    "assigned_institutions": "inst-1",
                    "annual_salary": 360000,
                }
            ],
            "profiles": [
                {
                    "id": "s1",
                    "name": "Ravi Kumar",
                    "position_name": "Accountant",
                    "hourly_rate": 500,
                }
            ],
        }
    )


@pytest.fixture
def container(store):
    return build_container_from_store(store)


@pytest.fixture
def officer(container):
    return container.employee_service.require(EmployeeType.OFFICER, "o1")


@pytest.fixture
def staff(container):
    return container.employee_service.require(EmployeeType.STAFF, "s1")

