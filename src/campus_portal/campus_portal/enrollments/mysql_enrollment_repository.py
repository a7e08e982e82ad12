from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..students.model import Student
from ..students.mysql_student_repository import to_student
from .model import SubjectDescriptor, SubjectEnrollment
from .repository import EnrollmentRepository

_COLUMNS = "se.id, se.subject_name, se.subject_code, se.credits, se.faculty_email, se.created_at, se.updated_at"


def _to_enrollment(r: dict) -> SubjectEnrollment:
    return SubjectEnrollment(
        enrollment_id=int(r["id"]),
        subject_name=r["subject_name"],
        subject_code=r["subject_code"],
        credits=int(r["credits"]),
        faculty_email=r["faculty_email"],
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, enrollment_id: int) -> Optional[SubjectEnrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subject_enrollments se WHERE se.id=%s", (int(enrollment_id),))
            row = fetchone(cur)
            return _to_enrollment(row) if row else None

    def list_all(self) -> Sequence[SubjectEnrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subject_enrollments se ORDER BY se.created_at DESC, se.id DESC")
            return [_to_enrollment(r) for r in fetchall(cur)]

    def list_by_faculty(self, faculty_email: str) -> Sequence[SubjectEnrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM subject_enrollments se
                WHERE se.faculty_email=%s
                ORDER BY se.created_at DESC, se.id DESC
                """,
                (faculty_email,),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]

    def list_by_student(self, student_email: str) -> Sequence[SubjectEnrollment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM subject_enrollments se
                JOIN subject_enrollment_students ses ON ses.subject_id = se.id
                WHERE ses.student_email=%s
                ORDER BY se.subject_name ASC, se.id ASC
                """,
                (student_email,),
            )
            return [_to_enrollment(r) for r in fetchall(cur)]

    def create_with_roster(
        self,
        *,
        descriptor: SubjectDescriptor,
        faculty_email: str,
        student_emails: Sequence[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO subject_enrollments(subject_name, subject_code, credits, faculty_email)
                VALUES(%s,%s,%s,%s)
                """,
                (descriptor.subject_name, descriptor.subject_code, int(descriptor.credits), faculty_email),
            )
            enrollment_id = int(cur.lastrowid)
            if student_emails:
                cur.executemany(
                    "INSERT INTO subject_enrollment_students(subject_id, student_email) VALUES(%s,%s)",
                    [(enrollment_id, e) for e in student_emails],
                )
            return enrollment_id

    def roster(self, enrollment_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT
                    s.id, s.email, s.name, s.course, s.branch, s.semester, s.year, s.roll_no,
                    s.university_id, s.enrollment_code, s.enrollment_completed, s.dob, s.contact_no,
                    s.address, s.gender, s.nationality, s.blood_group, s.parent_contact_no,
                    s.parent_name, s.parent_occupation, s.stu_image IS NOT NULL AS has_image, s.created_at
                FROM subject_enrollment_students ses
                JOIN students s ON s.email = ses.student_email
                WHERE ses.subject_id=%s
                ORDER BY s.name ASC, s.id ASC
                """,
                (int(enrollment_id),),
            )
            return [to_student(r) for r in fetchall(cur)]

    def roster_size(self, enrollment_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM subject_enrollment_students WHERE subject_id=%s",
                (int(enrollment_id),),
            )
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def is_member(self, enrollment_id: int, student_email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM subject_enrollment_students WHERE subject_id=%s AND student_email=%s",
                (int(enrollment_id), student_email),
            )
            return fetchone(cur) is not None

    def add_member(self, enrollment_id: int, student_email: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO subject_enrollment_students(subject_id, student_email) VALUES(%s,%s)",
                (int(enrollment_id), student_email),
            )

    def remove_member(self, enrollment_id: int, student_email: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM subject_enrollment_students WHERE subject_id=%s AND student_email=%s",
                (int(enrollment_id), student_email),
            )

    def update(self, enrollment_id: int, *, descriptor: SubjectDescriptor) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE subject_enrollments
                SET subject_name=%s, subject_code=%s, credits=%s
                WHERE id=%s
                """,
                (descriptor.subject_name, descriptor.subject_code, int(descriptor.credits), int(enrollment_id)),
            )
            cur.execute("SELECT 1 AS found FROM subject_enrollments WHERE id=%s", (int(enrollment_id),))
            return fetchone(cur) is not None

    def delete(self, enrollment_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subject_enrollments WHERE id=%s", (int(enrollment_id),))
            return cur.rowcount > 0

    def count_by_faculty(self, faculty_email: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM subject_enrollments WHERE faculty_email=%s", (faculty_email,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def attendance_count(self, enrollment_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE subject_id=%s", (int(enrollment_id),))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
