from __future__ import annotations

from typing import Optional

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "id, identity_uid, email, name, role, university_id, created_at"


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["id"]),
        identity_uid=row["identity_uid"],
        email=row["email"],
        name=row["name"],
        role=Role(row["role"]),
        university_id=row.get("university_id"),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_identity_uid(self, identity_uid: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE identity_uid=%s", (identity_uid,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        identity_uid: str,
        email: str,
        name: str,
        role: Role,
        university_id: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(identity_uid, email, name, role, university_id)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (identity_uid, email, name, role.value, university_id),
            )
            return int(cur.lastrowid)

    def delete_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE email=%s", (email,))
            return cur.rowcount > 0
