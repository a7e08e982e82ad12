from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Faculty, NewFaculty


class FacultyRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[Faculty]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Faculty]:
        raise NotImplementedError

    def create_faculty(self, faculty: NewFaculty) -> int:
        raise NotImplementedError

    def set_university_id(self, *, faculty_id: int, university_id: str) -> bool:
        raise NotImplementedError

    def update_fields(self, email: str, fields: dict) -> bool:
        raise NotImplementedError

    def delete_by_email(self, email: str) -> bool:
        raise NotImplementedError
