from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Calendar, CalendarFile


class CalendarRepository(Protocol):
    def create(self, *, title: str, file_name: str, data: bytes) -> int:
        raise NotImplementedError

    def get_by_id(self, calendar_id: int) -> Optional[Calendar]:
        raise NotImplementedError

    def get_file(self, calendar_id: int) -> Optional[CalendarFile]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Calendar]:
        """Newest first."""

        raise NotImplementedError

    def update_title(self, calendar_id: int, title: str) -> bool:
        raise NotImplementedError

    def delete(self, calendar_id: int) -> bool:
        raise NotImplementedError
