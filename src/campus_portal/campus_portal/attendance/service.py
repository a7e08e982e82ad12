from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.constants import DEFAULT_SUMMARY_WINDOW_DAYS
from ..core.exceptions import AuthorizationError, BusinessRuleError, NotFoundError, ValidationError
from ..common.datetime_utils import default_window, today
from ..enrollments.model import SubjectEnrollment
from ..enrollments.repository import EnrollmentRepository
from ..faculty.repository import FacultyRepository
from ..students.repository import StudentRepository
from . import calculator
from .model import (
    AttendanceMark,
    AttendanceRecord,
    AttendanceReportRow,
    AttendanceSummary,
    DailyAttendanceRow,
    SubjectAttendanceStats,
    SubjectSummary,
)
from .repository import AttendanceRepository


class AttendanceService:
    """Use cases: bulk marking and the attendance read models.

    Marking is all-or-nothing per batch: every mark is validated before any
    record is written, and the writes share one transaction.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        enrollments: EnrollmentRepository,
        students: StudentRepository,
        faculty: FacultyRepository,
        *,
        summary_window_days: int = DEFAULT_SUMMARY_WINDOW_DAYS,
    ):
        self._attendance = attendance
        self._enrollments = enrollments
        self._students = students
        self._faculty = faculty
        self._summary_window_days = int(summary_window_days)

    def _require_subject(self, subject_id: int) -> SubjectEnrollment:
        enrollment = self._enrollments.get_by_id(subject_id)
        if not enrollment:
            raise NotFoundError(f"Subject not found with id: {subject_id}")
        return enrollment

    def _require_student(self, student_email: str):
        student = self._students.get_by_email(student_email)
        if not student:
            raise NotFoundError(f"Student not found with email: {student_email}")
        return student

    # ---- marking ----

    def mark_bulk(
        self,
        *,
        faculty_email: str,
        subject_id: int,
        marks: Sequence[AttendanceMark],
        day: Optional[date] = None,
    ) -> list[AttendanceRecord]:
        if not marks:
            raise ValidationError("studentAttendances must be a non-empty list")

        day = day or today()

        faculty = self._faculty.get_by_email(faculty_email)
        if not faculty:
            raise NotFoundError(f"Faculty not found with email: {faculty_email}")

        subject = self._require_subject(subject_id)
        if subject.faculty_email.lower() != faculty.email.lower():
            raise BusinessRuleError("Faculty doesn't teach this subject")

        # Same student twice in one batch, in any letter case: the later entry wins.
        collapsed: dict[str, AttendanceMark] = {}
        for m in marks:
            collapsed[m.student_email.lower()] = m

        for email in (m.student_email for m in collapsed.values()):
            if not self._students.get_by_email(email):
                raise BusinessRuleError(f"Student not found: {email}")
            if not self._enrollments.is_member(subject.enrollment_id, email):
                raise BusinessRuleError(f"Student not enrolled: {email}")

        return list(
            self._attendance.upsert_marks(
                subject_id=subject.enrollment_id,
                faculty_email=faculty.email,
                day=day,
                marks=list(collapsed.values()),
            )
        )

    # ---- subject views ----

    def roster_for_date(self, subject_id: int, day: date) -> list[DailyAttendanceRow]:
        """One row per roster member; members without a record show as absent."""

        subject = self._require_subject(subject_id)
        faculty = self._faculty.get_by_email(subject.faculty_email)
        by_email = {r.student_email: r for r in self._attendance.list_for_subject_and_date(subject.enrollment_id, day)}

        rows = []
        for student in self._enrollments.roster(subject.enrollment_id):
            record = by_email.get(student.email)
            rows.append(
                DailyAttendanceRow(
                    attendance_id=record.attendance_id if record else None,
                    student_email=student.email,
                    student_name=student.name,
                    faculty_email=subject.faculty_email,
                    faculty_name=faculty.name if faculty else None,
                    subject_id=subject.enrollment_id,
                    subject_name=subject.subject_name,
                    subject_code=subject.subject_code,
                    date=day,
                    present=record.present if record else False,
                    remarks=record.remarks if record else None,
                )
            )
        return rows

    def subject_stats(self, subject_id: int) -> SubjectAttendanceStats:
        subject = self._require_subject(subject_id)
        return self._stats_for(subject)

    def _stats_for(self, subject: SubjectEnrollment) -> SubjectAttendanceStats:
        records = self._attendance.list_for_subject(subject.enrollment_id)
        roster_size = self._enrollments.roster_size(subject.enrollment_id)
        total_classes, total_present, total_possible, pct = calculator.subject_totals(records, roster_size)
        return SubjectAttendanceStats(
            subject_id=subject.enrollment_id,
            subject_name=subject.subject_name,
            subject_code=subject.subject_code,
            total_classes=total_classes,
            total_present=total_present,
            total_students=roster_size,
            total_possible=total_possible,
            attendance_percentage=pct,
        )

    # ---- student views ----

    def summary_window(self, start: Optional[date], end: Optional[date]) -> tuple[date, date]:
        default_start, default_end = default_window(self._summary_window_days, end=end)
        start = start or default_start
        end = end or default_end
        if start > end:
            raise ValidationError("startDate must not be after endDate")
        return start, end

    def student_summary(
        self,
        student_email: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> AttendanceSummary:
        self._require_student(student_email)
        start, end = self.summary_window(start, end)

        subjects = [
            self._subject_summary(student_email, e, start_date=start, end_date=end)
            for e in self._enrollments.list_by_student(student_email)
        ]
        return AttendanceSummary(
            student_email=student_email,
            start_date=start,
            end_date=end,
            overall_percentage=calculator.overall_percentage([s.percentage for s in subjects]),
            subjects=subjects,
        )

    def _subject_summary(
        self,
        student_email: str,
        subject: SubjectEnrollment,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> SubjectSummary:
        records = self._attendance.list_for_student_subject(
            student_email,
            subject.enrollment_id,
            start_date=start_date,
            end_date=end_date,
        )
        total, present, pct = calculator.student_subject_totals(records)
        faculty = self._faculty.get_by_email(subject.faculty_email)
        return SubjectSummary(
            subject_id=subject.enrollment_id,
            subject_name=subject.subject_name,
            subject_code=subject.subject_code,
            credits=subject.credits,
            faculty_name=faculty.name if faculty else None,
            total_lectures=total,
            total_present=present,
            percentage=pct,
        )

    def student_history(self, student_email: str, subject_id: Optional[int] = None) -> list[AttendanceReportRow]:
        """Records for a student, optionally for one subject; no roster check."""

        self._require_student(student_email)
        return list(self._attendance.history_for_student(student_email, subject_id))

    def student_subject_history(self, student_email: str, subject_id: int) -> list[AttendanceReportRow]:
        self._require_student(student_email)
        subject = self._require_subject(subject_id)
        if not self._enrollments.is_member(subject.enrollment_id, student_email):
            raise AuthorizationError("Student is not enrolled in this subject")
        return list(self._attendance.history_for_student(student_email, subject.enrollment_id))

    # ---- faculty views ----

    def faculty_history(self, faculty_email: str) -> list[AttendanceReportRow]:
        if not self._faculty.get_by_email(faculty_email):
            raise NotFoundError(f"Faculty not found with email: {faculty_email}")
        return list(self._attendance.history_for_faculty(faculty_email))

    def faculty_subject_stats(self, faculty_email: str) -> list[SubjectAttendanceStats]:
        if not self._faculty.get_by_email(faculty_email):
            raise NotFoundError(f"Faculty not found with email: {faculty_email}")
        return [self._stats_for(e) for e in self._enrollments.list_by_faculty(faculty_email)]
