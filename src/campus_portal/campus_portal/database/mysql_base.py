from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield (conn, cursor); commit on success, roll back on any exception.

    Everything executed inside one `with` block is a single transaction.
    """

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values: Sequence[Any]) -> str:
    """Placeholder list for `IN (...)`; callers must not pass an empty sequence."""

    if not values:
        raise ValueError("in_clause() requires at least one value")
    return ", ".join(["%s"] * len(values))


def as_bool(value: Any) -> bool:
    # TINYINT(1) comes back as int, BIT(1) as bytes depending on the connector build.
    if isinstance(value, (bytes, bytearray)):
        return value != b"\x00" and len(value) > 0
    return bool(value)


def as_bytes(value: Any) -> Optional[bytes]:
    if value is None:
        return None
    return bytes(value)
