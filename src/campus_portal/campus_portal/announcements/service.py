from __future__ import annotations

from typing import Optional

from ..common.validators import require_int, require_max_length, require_non_empty
from ..core.constants import DEFAULT_PAGE_SIZE, MAX_ANNOUNCEMENT_LENGTH
from ..core.exceptions import NotFoundError
from .model import Announcement, AnnouncementPage
from .repository import AnnouncementRepository


def _clean_message(message) -> str:
    message = require_non_empty(message, "Message")
    return require_max_length(message, "Message", MAX_ANNOUNCEMENT_LENGTH)


class AnnouncementService:
    def __init__(self, announcements: AnnouncementRepository):
        self._announcements = announcements

    def create(self, message) -> Announcement:
        announcement_id = self._announcements.create(_clean_message(message))
        return self.get(announcement_id)

    def get(self, announcement_id: int) -> Announcement:
        a = self._announcements.get_by_id(announcement_id)
        if not a:
            raise NotFoundError("Announcement not found")
        return a

    def list_all(self) -> list[Announcement]:
        return list(self._announcements.list_recent())

    def paginated(self, *, page=1, limit=DEFAULT_PAGE_SIZE) -> AnnouncementPage:
        page = require_int(page, "page", min_value=1)
        limit = require_int(limit, "limit", min_value=1, max_value=100)
        items = self._announcements.list_recent(limit=limit, offset=(page - 1) * limit)
        return AnnouncementPage(
            announcements=list(items),
            total_count=self._announcements.count(),
            page=page,
            limit=limit,
        )

    def current(self) -> Optional[Announcement]:
        """Most recent announcement, or None when there are none."""

        items = self._announcements.list_recent(limit=1)
        return items[0] if items else None

    def update(self, announcement_id: int, message) -> Announcement:
        message = _clean_message(message)
        if not self._announcements.update(announcement_id, message):
            raise NotFoundError("Announcement not found")
        return self.get(announcement_id)

    def delete(self, announcement_id: int) -> None:
        if not self._announcements.delete(announcement_id):
            raise NotFoundError("Announcement not found")
