from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..students.model import Student
from .model import SubjectDescriptor, SubjectEnrollment


class EnrollmentRepository(Protocol):
    """Subject enrollments and their roster (join table) membership."""

    def get_by_id(self, enrollment_id: int) -> Optional[SubjectEnrollment]:
        raise NotImplementedError

    def list_all(self) -> Sequence[SubjectEnrollment]:
        raise NotImplementedError

    def list_by_faculty(self, faculty_email: str) -> Sequence[SubjectEnrollment]:
        raise NotImplementedError

    def list_by_student(self, student_email: str) -> Sequence[SubjectEnrollment]:
        raise NotImplementedError

    def create_with_roster(
        self,
        *,
        descriptor: SubjectDescriptor,
        faculty_email: str,
        student_emails: Sequence[str],
    ) -> int:
        """Insert the enrollment and every roster row in one transaction."""

        raise NotImplementedError

    def roster(self, enrollment_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def roster_size(self, enrollment_id: int) -> int:
        raise NotImplementedError

    def is_member(self, enrollment_id: int, student_email: str) -> bool:
        raise NotImplementedError

    def add_member(self, enrollment_id: int, student_email: str) -> None:
        raise NotImplementedError

    def remove_member(self, enrollment_id: int, student_email: str) -> None:
        raise NotImplementedError

    def update(self, enrollment_id: int, *, descriptor: SubjectDescriptor) -> bool:
        raise NotImplementedError

    def delete(self, enrollment_id: int) -> bool:
        raise NotImplementedError

    def count_by_faculty(self, faculty_email: str) -> int:
        raise NotImplementedError

    def attendance_count(self, enrollment_id: int) -> int:
        raise NotImplementedError
