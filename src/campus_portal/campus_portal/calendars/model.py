from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class Calendar:
    """Calendar metadata; the file bytes are loaded only for downloads."""

    calendar_id: int
    title: str
    file_name: str
    last_updated: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.calendar_id,
            "title": self.title,
            "fileName": self.file_name,
            "lastUpdated": iso(self.last_updated),
        }


@dataclass(frozen=True)
class CalendarFile:
    calendar: Calendar
    data: bytes
