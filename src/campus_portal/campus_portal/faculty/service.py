from __future__ import annotations

from ..common.fields import to_columns
from ..core.exceptions import NotFoundError
from ..enrollments.model import EnrollmentDetail
from ..enrollments.service import SubjectEnrollmentService
from ..students.model import Student
from .model import UPDATABLE_FIELDS, Faculty
from .repository import FacultyRepository


class FacultyService:
    def __init__(self, faculty: FacultyRepository, enrollments: SubjectEnrollmentService):
        self._faculty = faculty
        self._enrollments = enrollments

    def get_profile(self, email: str) -> Faculty:
        faculty = self._faculty.get_by_email(email)
        if not faculty:
            raise NotFoundError("Faculty not found")
        return faculty

    def update_profile(self, email: str, changes: dict) -> Faculty:
        self.get_profile(email)
        self._faculty.update_fields(email, to_columns(changes, UPDATABLE_FIELDS))
        return self.get_profile(email)

    def subjects(self, email: str) -> list[EnrollmentDetail]:
        self.get_profile(email)
        return self._enrollments.list_by_faculty(email)

    def students(self, email: str) -> list[Student]:
        """Distinct students across every roster the faculty teaches, by name."""

        seen: dict[str, Student] = {}
        for detail in self.subjects(email):
            for s in detail.students:
                seen.setdefault(s.email, s)
        return sorted(seen.values(), key=lambda s: (s.name.lower(), s.email))
