from __future__ import annotations

from typing import Optional

from werkzeug.utils import secure_filename

from ..common.validators import require_non_empty, require_size
from ..core.constants import MAX_CALENDAR_FILE_BYTES
from ..core.exceptions import NotFoundError, ValidationError
from .model import Calendar, CalendarFile
from .repository import CalendarRepository


class CalendarService:
    def __init__(self, calendars: CalendarRepository):
        self._calendars = calendars

    def upload(self, *, title, file_name: Optional[str], data: Optional[bytes]) -> Calendar:
        title = require_non_empty(title, "Title")
        if not file_name or data is None:
            raise ValidationError("No file uploaded")

        require_size(data, "Calendar file", MAX_CALENDAR_FILE_BYTES)
        safe_name = secure_filename(file_name) or "calendar"

        calendar_id = self._calendars.create(title=title, file_name=safe_name, data=data)
        return self.get(calendar_id)

    def list_all(self) -> list[Calendar]:
        return list(self._calendars.list_all())

    def latest(self) -> Calendar:
        items = self._calendars.list_all()
        if not items:
            raise NotFoundError("No calendar found")
        return items[0]

    def get(self, calendar_id: int) -> Calendar:
        c = self._calendars.get_by_id(calendar_id)
        if not c:
            raise NotFoundError("Calendar not found")
        return c

    def download(self, calendar_id: int) -> CalendarFile:
        f = self._calendars.get_file(calendar_id)
        if not f:
            raise NotFoundError("Calendar not found")
        return f

    def update_title(self, calendar_id: int, title) -> Calendar:
        title = require_non_empty(title, "Title")
        if not self._calendars.update_title(calendar_id, title):
            raise NotFoundError("Calendar not found")
        return self.get(calendar_id)

    def delete(self, calendar_id: int) -> None:
        if not self._calendars.delete(calendar_id):
            raise NotFoundError("Calendar not found")
