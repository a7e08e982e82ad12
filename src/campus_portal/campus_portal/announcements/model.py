from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class Announcement:
    announcement_id: int
    message: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.announcement_id,
            "message": self.message,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


@dataclass(frozen=True)
class AnnouncementPage:
    announcements: list[Announcement]
    total_count: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total_count + self.limit - 1) // self.limit

    def to_dict(self) -> dict:
        return {
            "announcements": [a.to_dict() for a in self.announcements],
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "currentPage": self.page,
            "hasNextPage": self.page < self.total_pages,
            "hasPrevPage": self.page > 1,
        }
