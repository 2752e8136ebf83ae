from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Mapping

import mysql.connector

from ..core.logging_config import get_logger
from .connection import DBConfig

logger = get_logger(__name__)

# The configured database is authoritative, so these are dropped from the script.
_DATABASE_DIRECTIVES = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def read_schema(schema_path: str | Path) -> str:
    """Schema script without comment lines or database directives."""
    text = Path(schema_path).read_text(encoding="utf-8")
    text = _DATABASE_DIRECTIVES.sub("", text)
    return "\n".join(line for line in text.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Yield statements separated by ``;``, ignoring separators inside quotes."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote is not None:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def _open(target: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(**target.connect_kwargs(with_database=with_database))


def ensure_database_exists(db_config: Mapping) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _open(target, with_database=False)
    try:
        conn.cursor().execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: Mapping, *, schema_path: str | Path) -> int:
    """Create the database if needed and run the schema; returns the statement count."""
    target = DBConfig.from_dict(db_config)
    ensure_database_exists(db_config)
    statements = list(iter_sql_statements(read_schema(schema_path)))

    conn = _open(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("applied %d schema statements to %s", len(statements), target.describe())
    return len(statements)


def list_tables(db_config: Mapping) -> list[str]:
    conn = _open(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
    finally:
        conn.close()
