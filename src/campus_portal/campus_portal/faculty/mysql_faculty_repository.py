from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import UPDATABLE_FIELDS, Faculty, NewFaculty
from .repository import FacultyRepository

_COLUMNS = """
    id, email, name, department, university_id, dob, contact_no, address,
    gender, nationality, blood_group, image IS NOT NULL AS has_image, created_at
"""

_ALLOWED_COLUMNS = frozenset(UPDATABLE_FIELDS.values())


def to_faculty(r: dict) -> Faculty:
    return Faculty(
        faculty_id=int(r["id"]),
        email=r["email"],
        name=r["name"],
        department=r["department"],
        university_id=r.get("university_id"),
        dob=r.get("dob"),
        contact_no=r.get("contact_no"),
        address=r.get("address"),
        gender=r.get("gender"),
        nationality=r.get("nationality"),
        blood_group=r.get("blood_group"),
        has_image=as_bool(r.get("has_image")),
        created_at=r.get("created_at"),
    )


class MySQLFacultyRepository(FacultyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM faculty WHERE email=%s", (email,))
            row = fetchone(cur)
            return to_faculty(row) if row else None

    def list_all(self) -> Sequence[Faculty]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM faculty ORDER BY created_at DESC, id DESC")
            return [to_faculty(r) for r in fetchall(cur)]

    def create_faculty(self, faculty: NewFaculty) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO faculty(
                    email, name, department, university_id, dob, contact_no,
                    address, gender, nationality, blood_group
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    faculty.email,
                    faculty.name,
                    faculty.department,
                    faculty.university_id,
                    faculty.dob,
                    faculty.contact_no,
                    faculty.address,
                    faculty.gender,
                    faculty.nationality,
                    faculty.blood_group,
                ),
            )
            return int(cur.lastrowid)

    def set_university_id(self, *, faculty_id: int, university_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE faculty SET university_id=%s WHERE id=%s", (university_id, int(faculty_id)))
            return cur.rowcount > 0

    def update_fields(self, email: str, fields: dict) -> bool:
        if not fields:
            return self.get_by_email(email) is not None

        unknown = set(fields) - _ALLOWED_COLUMNS
        if unknown:
            raise ValueError(f"Unsupported faculty columns: {sorted(unknown)}")

        columns = sorted(fields)
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE faculty SET {assignments} WHERE email=%s",
                tuple(fields[c] for c in columns) + (email,),
            )
            cur.execute("SELECT 1 AS found FROM faculty WHERE email=%s", (email,))
            return fetchone(cur) is not None

    def delete_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM faculty WHERE email=%s", (email,))
            return cur.rowcount > 0
