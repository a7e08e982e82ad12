from __future__ import annotations

import io

from flask import Blueprint, Flask, request, send_file

from ..auth.guard import Guard
from ..auth.policy import ResourceKind
from ..common.http import json_body, success, uploaded_file
from ..container import Container
from ..core.enums import Action


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("calendar", __name__, url_prefix="/api/calendar")
    guard = Guard(container.auth_service)
    svc = container.calendar_service

    @bp.post("/upload")
    @guard.requires(ResourceKind.CALENDAR, Action.CREATE)
    def upload():
        f = uploaded_file("file")
        calendar = svc.upload(
            title=request.form.get("title"),
            file_name=f.filename if f else None,
            data=f.read() if f else None,
        )
        return success("Calendar uploaded successfully", status=201, calendar=calendar.to_dict())

    @bp.get("/")
    @guard.requires(ResourceKind.CALENDAR, Action.READ)
    def list_all():
        return success(calendars=[c.to_dict() for c in svc.list_all()])

    @bp.get("/latest")
    @guard.requires(ResourceKind.CALENDAR, Action.READ)
    def latest():
        return success(calendar=svc.latest().to_dict())

    @bp.get("/<int:calendar_id>")
    @guard.requires(ResourceKind.CALENDAR, Action.READ)
    def get_one(calendar_id: int):
        return success(calendar=svc.get(calendar_id).to_dict())

    @bp.get("/<int:calendar_id>/download")
    @guard.requires(ResourceKind.CALENDAR, Action.READ)
    def download(calendar_id: int):
        f = svc.download(calendar_id)
        return send_file(
            io.BytesIO(f.data),
            as_attachment=True,
            download_name=f.calendar.file_name,
            mimetype="application/octet-stream",
        )

    @bp.put("/<int:calendar_id>")
    @guard.requires(ResourceKind.CALENDAR, Action.UPDATE)
    def update(calendar_id: int):
        calendar = svc.update_title(calendar_id, json_body().get("title"))
        return success("Calendar updated successfully", calendar=calendar.to_dict())

    @bp.delete("/<int:calendar_id>")
    @guard.requires(ResourceKind.CALENDAR, Action.DELETE)
    def delete(calendar_id: int):
        svc.delete(calendar_id)
        return success("Calendar deleted successfully")

    app.register_blueprint(bp)
