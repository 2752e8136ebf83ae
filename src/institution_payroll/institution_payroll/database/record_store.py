"""Generic record store used by every repository.

The store only knows tables, equality filters and date windows; repositories
turn rows into domain models. ``MySQLRecordStore`` is the production
implementation, tests use an in-memory one with the same contract.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence, Union

from ..common.datetime_utils import as_date
from ..core.exceptions import StorageError
from .connection import DatabaseConnection
from .mysql_base import db_cursor, rows_of

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


def _ident(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise StorageError(f"Invalid identifier: {name!r}")
    return f"`{name}`"


@dataclass(frozen=True)
class DateRange:
    """``column`` between start and end, both inclusive."""

    column: str
    start: date
    end: date

    def sql(self) -> tuple[str, list[Any]]:
        col = _ident(self.column)
        return f"{col} >= %s AND {col} <= %s", [self.start, self.end]

    def matches(self, row: Mapping[str, Any]) -> bool:
        value = row.get(self.column)
        return value is not None and self.start <= as_date(value) <= self.end


@dataclass(frozen=True)
class SpanOverlap:
    """Rows whose [start_column, end_column] span intersects [start, end]."""

    start_column: str
    end_column: str
    start: date
    end: date

    def sql(self) -> tuple[str, list[Any]]:
        return (
            f"{_ident(self.start_column)} <= %s AND {_ident(self.end_column)} >= %s",
            [self.end, self.start],
        )

    def matches(self, row: Mapping[str, Any]) -> bool:
        s, e = row.get(self.start_column), row.get(self.end_column)
        if s is None or e is None:
            return False
        return as_date(s) <= self.end and as_date(e) >= self.start


Window = Union[DateRange, SpanOverlap]


def filter_matches(row: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    """Filter semantics shared by all stores: None → IS NULL, list/tuple/set → IN, else equality."""
    for key, expected in filters.items():
        actual = row.get(key)
        if expected is None:
            if actual is not None:
                return False
        elif isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


class RecordStore(Protocol):
    def query(
        self,
        table: str,
        *,
        filters: Optional[Mapping[str, Any]] = None,
        window: Optional[Window] = None,
        order_by: Optional[str] = None,
    ) -> list[dict]:
        raise NotImplementedError

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[dict]:
        raise NotImplementedError

    def insert_unique(self, table: str, rows: Sequence[Mapping[str, Any]], *, key: Sequence[str]) -> list[dict]:
        """Insert rows whose ``key`` columns are not stored yet.

        Returns the stored row for every key, whether it was inserted by this
        call or already existed.
        """
        raise NotImplementedError

    def update(self, table: str, record_id: Any, patch: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete(self, table: str, *, filters: Mapping[str, Any]) -> int:
        raise NotImplementedError


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _where(filters: Optional[Mapping[str, Any]], window: Optional[Window]) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []

        for key, value in (filters or {}).items():
            col = _ident(key)
            if value is None:
                clauses.append(f"{col} IS NULL")
            elif isinstance(value, (list, tuple, set, frozenset)):
                values = list(value)
                if not values:
                    clauses.append("1=0")
                    continue
                clauses.append(f"{col} IN ({', '.join(['%s'] * len(values))})")
                params.extend(values)
            else:
                clauses.append(f"{col}=%s")
                params.append(value)

        if window is not None:
            clause, window_params = window.sql()
            clauses.append(clause)
            params.extend(window_params)

        if not clauses:
            return "", params
        return " WHERE " + " AND ".join(clauses), params

    def query(self, table, *, filters=None, window=None, order_by=None) -> list[dict]:
        where, params = self._where(filters, window)
        sql = f"SELECT * FROM {_ident(table)}{where}"
        if order_by:
            sql += f" ORDER BY {_ident(order_by)} ASC"

        with db_cursor(self._conn_factory, table=table) as cur:
            cur.execute(sql, tuple(params))
            return rows_of(cur)

    def insert(self, table, rows) -> list[dict]:
        if not rows:
            return []

        inserted: list[dict] = []
        with db_cursor(self._conn_factory, table=table) as cur:
            for row in rows:
                columns = list(row.keys())
                cur.execute(
                    f"INSERT INTO {_ident(table)} ({', '.join(_ident(c) for c in columns)}) "
                    f"VALUES ({', '.join(['%s'] * len(columns))})",
                    tuple(row[c] for c in columns),
                )
                inserted.append({**row, "id": row.get("id") or cur.lastrowid})
        return inserted

    def insert_unique(self, table, rows, *, key) -> list[dict]:
        if not rows:
            return []

        stored: list[dict] = []
        match = " AND ".join(f"{_ident(k)}=%s" for k in key)
        with db_cursor(self._conn_factory, table=table) as cur:
            for row in rows:
                columns = list(row.keys())
                # needs a UNIQUE index over the key columns
                cur.execute(
                    f"INSERT INTO {_ident(table)} ({', '.join(_ident(c) for c in columns)}) "
                    f"VALUES ({', '.join(['%s'] * len(columns))}) ON DUPLICATE KEY UPDATE `id`=`id`",
                    tuple(row[c] for c in columns),
                )
                cur.execute(f"SELECT * FROM {_ident(table)} WHERE {match}", tuple(row[k] for k in key))
                stored.extend(rows_of(cur))
        return stored

    def update(self, table, record_id, patch) -> None:
        if not patch:
            return
        columns = list(patch.keys())
        with db_cursor(self._conn_factory, table=table) as cur:
            cur.execute(
                f"UPDATE {_ident(table)} SET {', '.join(f'{_ident(c)}=%s' for c in columns)} WHERE `id`=%s",
                (*[patch[c] for c in columns], record_id),
            )

    def delete(self, table, *, filters) -> int:
        if not filters:
            raise StorageError("Refusing to delete without filters", table=table)
        where, params = self._where(filters, None)
        with db_cursor(self._conn_factory, table=table) as cur:
            cur.execute(f"DELETE FROM {_ident(table)}{where}", tuple(params))
            return int(cur.rowcount)
