from __future__ import annotations

from flask import Blueprint, Flask, request

from ..auth.guard import Guard
from ..auth.policy import ResourceKind
from ..common.http import json_body, success
from ..container import Container
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import Action


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("announcements", __name__, url_prefix="/api/announcements")
    guard = Guard(container.auth_service)
    svc = container.announcement_service

    @bp.post("/")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.CREATE)
    def create():
        announcement = svc.create(json_body().get("message"))
        return success("Announcement created successfully", status=201, announcement=announcement.to_dict())

    @bp.get("/")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.READ)
    def list_all():
        return success(announcements=[a.to_dict() for a in svc.list_all()])

    @bp.get("/paginated")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.READ)
    def paginated():
        page = svc.paginated(
            page=request.args.get("page", 1),
            limit=request.args.get("limit", DEFAULT_PAGE_SIZE),
        )
        return success(**page.to_dict())

    @bp.get("/current")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.READ)
    def current():
        a = svc.current()
        return success(announcement=a.to_dict() if a else None)

    @bp.get("/<int:announcement_id>")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.READ)
    def get_one(announcement_id: int):
        return success(announcement=svc.get(announcement_id).to_dict())

    @bp.put("/<int:announcement_id>")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.UPDATE)
    def update(announcement_id: int):
        announcement = svc.update(announcement_id, json_body().get("message"))
        return success("Announcement updated successfully", announcement=announcement.to_dict())

    @bp.delete("/<int:announcement_id>")
    @guard.requires(ResourceKind.ANNOUNCEMENT, Action.DELETE)
    def delete(announcement_id: int):
        svc.delete(announcement_id)
        return success("Announcement deleted successfully")

    app.register_blueprint(bp)
