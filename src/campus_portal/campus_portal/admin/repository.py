from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import AdminProfile


class AdminRepository(Protocol):
    def get_by_email(self, email: str) -> Optional[AdminProfile]:
        raise NotImplementedError

    def create_admin(self, *, name: str, email: str, university_id: Optional[str], dob: Optional[date]) -> int:
        raise NotImplementedError

    def delete_by_email(self, email: str) -> bool:
        raise NotImplementedError
