from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bytes, db_cursor, fetchall, fetchone
from .model import Calendar, CalendarFile
from .repository import CalendarRepository

_COLUMNS = "id, title, file_name, last_updated"


def _to_calendar(r: dict) -> Calendar:
    return Calendar(
        calendar_id=int(r["id"]),
        title=r["title"],
        file_name=r["file_name"],
        last_updated=r.get("last_updated"),
    )


class MySQLCalendarRepository(CalendarRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, title: str, file_name: str, data: bytes) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO calendars(title, file_name, file_data) VALUES(%s,%s,%s)",
                (title, file_name, data),
            )
            return int(cur.lastrowid)

    def get_by_id(self, calendar_id: int) -> Optional[Calendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM calendars WHERE id=%s", (int(calendar_id),))
            r = fetchone(cur)
            return _to_calendar(r) if r else None

    def get_file(self, calendar_id: int) -> Optional[CalendarFile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS}, file_data FROM calendars WHERE id=%s", (int(calendar_id),))
            r = fetchone(cur)
            if not r:
                return None
            return CalendarFile(calendar=_to_calendar(r), data=as_bytes(r["file_data"]) or b"")

    def list_all(self) -> Sequence[Calendar]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM calendars ORDER BY last_updated DESC, id DESC")
            return [_to_calendar(r) for r in fetchall(cur)]

    def update_title(self, calendar_id: int, title: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE calendars SET title=%s, last_updated=CURRENT_TIMESTAMP WHERE id=%s",
                (title, int(calendar_id)),
            )
            return cur.rowcount > 0

    def delete(self, calendar_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM calendars WHERE id=%s", (int(calendar_id),))
            return cur.rowcount > 0
