from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    """Announcements, newest first."""

    def create(self, message: str) -> int:
        raise NotImplementedError

    def get_by_id(self, announcement_id: int) -> Optional[Announcement]:
        raise NotImplementedError

    def list_recent(self, *, limit: Optional[int] = None, offset: int = 0) -> Sequence[Announcement]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def update(self, announcement_id: int, message: str) -> bool:
        raise NotImplementedError

    def delete(self, announcement_id: int) -> bool:
        raise NotImplementedError
