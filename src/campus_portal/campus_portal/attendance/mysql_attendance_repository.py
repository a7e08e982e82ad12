from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import AttendanceMark, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_COLUMNS = "a.id, a.student_email, a.faculty_email, a.subject_id, a.date, a.present, a.remarks, a.created_at, a.updated_at"

_REPORT_SELECT = f"""
    SELECT {_COLUMNS},
           s.name AS student_name,
           se.subject_name, se.subject_code,
           f.name AS faculty_name
    FROM attendance a
    LEFT JOIN students s ON s.email = a.student_email
    LEFT JOIN subject_enrollments se ON se.id = a.subject_id
    LEFT JOIN faculty f ON f.email = a.faculty_email
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        student_email=r["student_email"],
        faculty_email=r["faculty_email"],
        subject_id=int(r["subject_id"]),
        date=r["date"],
        present=as_bool(r["present"]),
        remarks=r.get("remarks"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _to_report_row(r: dict) -> AttendanceReportRow:
    return AttendanceReportRow(
        record=_to_record(r),
        student_name=r.get("student_name"),
        subject_name=r.get("subject_name"),
        subject_code=r.get("subject_code"),
        faculty_name=r.get("faculty_name"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _read_back(cur, student_email: str, subject_id: int, day: date) -> AttendanceRecord:
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance a
            WHERE a.student_email=%s AND a.subject_id=%s AND a.date=%s
            """,
            (student_email, int(subject_id), day),
        )
        return _to_record(fetchone(cur))

    def upsert_marks(
        self,
        *,
        subject_id: int,
        faculty_email: str,
        day: date,
        marks: Sequence[AttendanceMark],
    ) -> Sequence[AttendanceRecord]:
        # uq_attendance_student_subject_date turns a second mark for the same key into an update.
        out: list[AttendanceRecord] = []
        with db_cursor(self._conn_factory) as (_, cur):
            for m in marks:
                cur.execute(
                    """
                    INSERT INTO attendance(student_email, faculty_email, subject_id, date, present, remarks)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE present=VALUES(present), remarks=VALUES(remarks)
                    """,
                    (m.student_email, faculty_email, int(subject_id), day, bool(m.present), m.remarks),
                )
                out.append(self._read_back(cur, m.student_email, subject_id, day))
        return out

    def list_for_subject_and_date(self, subject_id: int, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.subject_id=%s AND a.date=%s ORDER BY a.student_email",
                (int(subject_id), day),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_subject(self, subject_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.subject_id=%s ORDER BY a.date, a.student_email",
                (int(subject_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_student_subject(
        self,
        student_email: str,
        subject_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["a.student_email=%s", "a.subject_id=%s"]
        params: list[object] = [student_email, int(subject_id)]

        if start_date is not None:
            clauses.append("a.date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("a.date <= %s")
            params.append(end_date)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE {where} ORDER BY a.date DESC", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def history_for_student(self, student_email: str, subject_id: Optional[int] = None) -> Sequence[AttendanceReportRow]:
        clauses = ["a.student_email=%s"]
        params: list[object] = [student_email]
        if subject_id is not None:
            clauses.append("a.subject_id=%s")
            params.append(int(subject_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_REPORT_SELECT} WHERE {' AND '.join(clauses)} ORDER BY a.date DESC, a.id DESC",
                tuple(params),
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def history_for_faculty(self, faculty_email: str) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_REPORT_SELECT} WHERE a.faculty_email=%s ORDER BY a.date DESC, a.id DESC",
                (faculty_email,),
            )
            return [_to_report_row(r) for r in fetchall(cur)]

    def count_for_student(self, student_email: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE student_email=%s", (student_email,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0

    def count_for_faculty(self, faculty_email: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM attendance WHERE faculty_email=%s", (faculty_email,))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
