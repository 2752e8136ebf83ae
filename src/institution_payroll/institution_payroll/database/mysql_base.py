from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import mysql.connector

from ..core.exceptions import StorageError
from ..core.logging_config import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)


@contextmanager
def db_cursor(source: DatabaseConnection, *, table: Optional[str] = None) -> Iterator:
    """Dictionary cursor for one transaction.

    Commits when the block exits cleanly and rolls back otherwise. Driver
    errors are re-raised as StorageError tagged with ``table``.
    """
    try:
        conn = source.connect()
    except mysql.connector.Error as exc:
        raise StorageError(f"Cannot connect to database: {exc}", table=table) from exc

    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.warning("rolled back work on %s: %s", table or "?", exc)
        raise StorageError(str(exc), table=table) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def rows_of(cur) -> list[dict]:
    return list(cur.fetchall() or [])
