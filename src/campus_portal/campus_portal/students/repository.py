from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewStudent, Student


class StudentRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Student]:
        raise NotImplementedError

    def get_by_roll_no(self, roll_no: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_emails(self, emails: Sequence[str]) -> Sequence[Student]:
        raise NotImplementedError

    def create_student(self, student: NewStudent) -> int:
        raise NotImplementedError

    def set_identifiers(self, *, student_id: int, roll_no: Optional[str], university_id: Optional[str]) -> bool:
        raise NotImplementedError

    def update_fields(self, email: str, fields: dict) -> bool:
        """`fields` is keyed by column name."""

        raise NotImplementedError

    def delete_by_email(self, email: str) -> bool:
        raise NotImplementedError

    def set_image(self, email: str, data: bytes) -> bool:
        raise NotImplementedError

    def get_image(self, email: str) -> Optional[bytes]:
        raise NotImplementedError
