from __future__ import annotations

from typing import Optional, Sequence

from ..common.validators import require_int, require_non_empty
from ..core.constants import MAX_CREDITS, MIN_CREDITS
from ..core.exceptions import BusinessRuleError, NotFoundError
from ..faculty.repository import FacultyRepository
from ..students.repository import StudentRepository
from .model import EnrollmentDetail, SubjectDescriptor, SubjectEnrollment
from .repository import EnrollmentRepository


def make_descriptor(subject_name, subject_code, credits) -> SubjectDescriptor:
    return SubjectDescriptor(
        subject_name=require_non_empty(subject_name, "Subject name"),
        subject_code=require_non_empty(subject_code, "Subject code"),
        credits=require_int(credits, "Credits", min_value=MIN_CREDITS, max_value=MAX_CREDITS),
    )


class SubjectEnrollmentService:
    """Use cases: course offerings and roster membership."""

    def __init__(self, enrollments: EnrollmentRepository, students: StudentRepository, faculty: FacultyRepository):
        self._enrollments = enrollments
        self._students = students
        self._faculty = faculty

    def _require_faculty(self, faculty_email: str):
        faculty = self._faculty.get_by_email(faculty_email)
        if not faculty:
            raise NotFoundError(f"Faculty not found with email: {faculty_email}")
        return faculty

    def create_for_all_students(self, *, faculty_email: str, descriptor: SubjectDescriptor) -> EnrollmentDetail:
        faculty = self._require_faculty(faculty_email)

        students = list(self._students.list_all())
        if not students:
            raise BusinessRuleError("No students available for enrollment")

        enrollment_id = self._enrollments.create_with_roster(
            descriptor=descriptor,
            faculty_email=faculty.email,
            student_emails=[s.email for s in students],
        )
        return self.get_detail(enrollment_id)

    def create_for_specific_students(
        self,
        *,
        faculty_email: str,
        descriptor: SubjectDescriptor,
        student_emails: Sequence[str],
    ) -> EnrollmentDetail:
        faculty = self._require_faculty(faculty_email)

        requested = list(dict.fromkeys(student_emails))
        if not requested:
            raise BusinessRuleError("At least one student email is required")

        found = {s.email for s in self._students.list_by_emails(requested)}
        missing = [e for e in requested if e not in found]
        if missing:
            raise BusinessRuleError(f"One or more students not found: {', '.join(missing)}")

        enrollment_id = self._enrollments.create_with_roster(
            descriptor=descriptor,
            faculty_email=faculty.email,
            student_emails=requested,
        )
        return self.get_detail(enrollment_id)

    def get_detail(self, enrollment_id: int) -> EnrollmentDetail:
        enrollment = self._enrollments.get_by_id(enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        return self._detail(enrollment)

    def find_detail(self, enrollment_id: int) -> Optional[EnrollmentDetail]:
        enrollment = self._enrollments.get_by_id(enrollment_id)
        return self._detail(enrollment) if enrollment else None

    def _detail(self, enrollment: SubjectEnrollment) -> EnrollmentDetail:
        return EnrollmentDetail(
            enrollment=enrollment,
            faculty=self._faculty.get_by_email(enrollment.faculty_email),
            students=list(self._enrollments.roster(enrollment.enrollment_id)),
        )

    def list_all(self) -> list[EnrollmentDetail]:
        return [self._detail(e) for e in self._enrollments.list_all()]

    def list_by_faculty(self, faculty_email: str) -> list[EnrollmentDetail]:
        return [self._detail(e) for e in self._enrollments.list_by_faculty(faculty_email)]

    def list_by_student(self, student_email: str) -> list[EnrollmentDetail]:
        out = []
        for e in self._enrollments.list_by_student(student_email):
            out.append(EnrollmentDetail(enrollment=e, faculty=self._faculty.get_by_email(e.faculty_email)))
        return out

    def add_student(self, enrollment_id: int, student_email: str) -> bool:
        """Idempotent; False only when the enrollment or the student is missing."""

        if not self._enrollments.get_by_id(enrollment_id) or not self._students.get_by_email(student_email):
            return False
        self._enrollments.add_member(enrollment_id, student_email)
        return True

    def remove_student(self, enrollment_id: int, student_email: str) -> bool:
        if not self._enrollments.get_by_id(enrollment_id) or not self._students.get_by_email(student_email):
            return False
        self._enrollments.remove_member(enrollment_id, student_email)
        return True

    def update(self, enrollment_id: int, changes: dict) -> Optional[EnrollmentDetail]:
        current = self._enrollments.get_by_id(enrollment_id)
        if not current:
            return None

        descriptor = make_descriptor(
            changes.get("subjectName", current.subject_name),
            changes.get("subjectCode", current.subject_code),
            changes.get("credits", current.credits),
        )
        if not self._enrollments.update(enrollment_id, descriptor=descriptor):
            return None
        return self.get_detail(enrollment_id)

    def delete(self, enrollment_id: int) -> bool:
        if not self._enrollments.get_by_id(enrollment_id):
            return False
        if self._enrollments.attendance_count(enrollment_id) > 0:
            raise BusinessRuleError("Enrollment has attendance records and cannot be deleted")
        return self._enrollments.delete(enrollment_id)
