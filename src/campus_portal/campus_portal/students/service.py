from __future__ import annotations

from ..common.images import image_mimetype, inspect_image
from ..common.validators import require_size
from ..core.constants import MAX_PROFILE_IMAGE_BYTES
from ..core.exceptions import NotFoundError, ValidationError
from ..enrollments.model import EnrollmentDetail
from ..enrollments.service import SubjectEnrollmentService
from .model import Student
from .repository import StudentRepository


class StudentService:
    """Use cases on a student's own profile."""

    def __init__(self, students: StudentRepository, enrollments: SubjectEnrollmentService):
        self._students = students
        self._enrollments = enrollments

    def get_profile(self, email: str) -> Student:
        student = self._students.get_by_email(email)
        if not student:
            raise NotFoundError("Student not found")
        return student

    def subjects(self, email: str) -> list[EnrollmentDetail]:
        self.get_profile(email)
        return self._enrollments.list_by_student(email)

    def upload_image(self, email: str, data: bytes) -> str:
        """Store a profile image; returns its mimetype."""

        self.get_profile(email)
        if not data:
            raise ValidationError("No image uploaded")
        require_size(data, "Profile image", MAX_PROFILE_IMAGE_BYTES)
        mimetype = inspect_image(data)
        self._students.set_image(email, data)
        return mimetype

    def get_image(self, email: str) -> tuple[bytes, str]:
        self.get_profile(email)
        data = self._students.get_image(email)
        if not data:
            raise NotFoundError("Profile image not found")
        return data, image_mimetype(data)
