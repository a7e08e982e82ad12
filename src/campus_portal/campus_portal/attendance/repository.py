from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceMark, AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def upsert_marks(
        self,
        *,
        subject_id: int,
        faculty_email: str,
        day: date,
        marks: Sequence[AttendanceMark],
    ) -> Sequence[AttendanceRecord]:
        """Insert or update each (student, subject, day) record, overwriting present/remarks.

        All marks are written in one transaction.
        """

        raise NotImplementedError

    def list_for_subject_and_date(self, subject_id: int, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_subject(self, subject_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_student_subject(
        self,
        student_email: str,
        subject_id: int,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def history_for_student(self, student_email: str, subject_id: Optional[int] = None) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def history_for_faculty(self, faculty_email: str) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError

    def count_for_student(self, student_email: str) -> int:
        raise NotImplementedError

    def count_for_faculty(self, faculty_email: str) -> int:
        raise NotImplementedError
