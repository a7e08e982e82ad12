from __future__ import annotations

from datetime import date
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AdminProfile
from .repository import AdminRepository


class MySQLAdminRepository(AdminRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[AdminProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, name, email, university_id, dob, created_at FROM admin WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AdminProfile(
                admin_id=int(r["id"]),
                name=r["name"],
                email=r["email"],
                university_id=r.get("university_id"),
                dob=r.get("dob"),
                created_at=r.get("created_at"),
            )

    def create_admin(self, *, name: str, email: str, university_id: Optional[str], dob: Optional[date]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO admin(name, email, university_id, dob) VALUES(%s,%s,%s,%s)",
                (name, email, university_id, dob),
            )
            return int(cur.lastrowid)

    def delete_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM admin WHERE email=%s", (email,))
            return cur.rowcount > 0
