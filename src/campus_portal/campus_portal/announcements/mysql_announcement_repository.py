from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Announcement
from .repository import AnnouncementRepository

_COLUMNS = "id, message, created_at, updated_at"


def _to_announcement(r: dict) -> Announcement:
    return Announcement(
        announcement_id=int(r["id"]),
        message=r["message"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAnnouncementRepository(AnnouncementRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, message: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO announcements(message) VALUES(%s)", (message,))
            return int(cur.lastrowid)

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM announcements WHERE id=%s", (int(announcement_id),))
            r = fetchone(cur)
            return _to_announcement(r) if r else None

    def list_recent(self, *, limit: Optional[int] = None, offset: int = 0) -> Sequence[Announcement]:
        sql = f"SELECT {_COLUMNS} FROM announcements ORDER BY created_at DESC, id DESC"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params = (int(limit), int(offset))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_announcement(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM announcements")
            r = fetchone(cur)
            return int(r["n"]) if r else 0

    def update(self, announcement_id: int, message: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE announcements SET message=%s WHERE id=%s", (message, int(announcement_id)))
            if cur.rowcount:
                return True
            cur.execute("SELECT 1 AS ok FROM announcements WHERE id=%s", (int(announcement_id),))
            return fetchone(cur) is not None

    def delete(self, announcement_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM announcements WHERE id=%s", (int(announcement_id),))
            return cur.rowcount > 0
