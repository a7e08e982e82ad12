from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_bytes, db_cursor, fetchall, fetchone, in_clause
from .model import UPDATABLE_FIELDS, NewStudent, Student
from .repository import StudentRepository

_COLUMNS = """
    id, email, name, course, branch, semester, year, roll_no, university_id,
    enrollment_code, enrollment_completed, dob, contact_no, address, gender,
    nationality, blood_group, parent_contact_no, parent_name, parent_occupation,
    stu_image IS NOT NULL AS has_image, created_at
"""

_ALLOWED_COLUMNS = frozenset(UPDATABLE_FIELDS.values())


def to_student(r: dict) -> Student:
    completed = r.get("enrollment_completed")
    return Student(
        student_id=int(r["id"]),
        email=r["email"],
        name=r["name"],
        course=r["course"],
        branch=r["branch"],
        semester=int(r["semester"]),
        year=int(r["year"]),
        roll_no=r.get("roll_no"),
        university_id=r.get("university_id"),
        enrollment_code=r.get("enrollment_code"),
        enrollment_completed=None if completed is None else as_bool(completed),
        dob=r.get("dob"),
        contact_no=r.get("contact_no"),
        address=r.get("address"),
        gender=r.get("gender"),
        nationality=r.get("nationality"),
        blood_group=r.get("blood_group"),
        parent_contact_no=r.get("parent_contact_no"),
        parent_name=r.get("parent_name"),
        parent_occupation=r.get("parent_occupation"),
        has_image=as_bool(r.get("has_image")),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE email=%s", (email,))
            row = fetchone(cur)
            return to_student(row) if row else None

    def get_by_roll_no(self, roll_no: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE roll_no=%s ORDER BY id LIMIT 1", (roll_no,))
            row = fetchone(cur)
            return to_student(row) if row else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC, id DESC")
            return [to_student(r) for r in fetchall(cur)]

    def list_by_emails(self, emails: Sequence[str]) -> Sequence[Student]:
        if not emails:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE email IN ({in_clause(emails)}) ORDER BY name",
                tuple(emails),
            )
            return [to_student(r) for r in fetchall(cur)]

    def create_student(self, student: NewStudent) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(
                    email, name, course, branch, semester, year, roll_no, university_id,
                    enrollment_code, enrollment_completed, dob, contact_no, address, gender,
                    nationality, blood_group, parent_contact_no, parent_name, parent_occupation
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    student.email,
                    student.name,
                    student.course,
                    student.branch,
                    int(student.semester),
                    int(student.year),
                    student.roll_no,
                    student.university_id,
                    student.enrollment_code,
                    student.enrollment_completed,
                    student.dob,
                    student.contact_no,
                    student.address,
                    student.gender,
                    student.nationality,
                    student.blood_group,
                    student.parent_contact_no,
                    student.parent_name,
                    student.parent_occupation,
                ),
            )
            return int(cur.lastrowid)

    def set_identifiers(self, *, student_id: int, roll_no: Optional[str], university_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET roll_no=%s, university_id=%s WHERE id=%s",
                (roll_no, university_id, int(student_id)),
            )
            return cur.rowcount > 0

    def update_fields(self, email: str, fields: dict) -> bool:
        if not fields:
            return self.get_by_email(email) is not None

        unknown = set(fields) - _ALLOWED_COLUMNS
        if unknown:
            raise ValueError(f"Unsupported student columns: {sorted(unknown)}")

        columns = sorted(fields)
        assignments = ", ".join(f"{c}=%s" for c in columns)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE students SET {assignments} WHERE email=%s",
                tuple(fields[c] for c in columns) + (email,),
            )
            cur.execute("SELECT 1 AS found FROM students WHERE email=%s", (email,))
            return fetchone(cur) is not None

    def delete_by_email(self, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE email=%s", (email,))
            return cur.rowcount > 0

    def set_image(self, email: str, data: bytes) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE students SET stu_image=%s WHERE email=%s", (data, email))
            return cur.rowcount > 0

    def get_image(self, email: str) -> Optional[bytes]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT stu_image FROM students WHERE email=%s", (email,))
            row = fetchone(cur)
            return as_bytes(row["stu_image"]) if row else None
