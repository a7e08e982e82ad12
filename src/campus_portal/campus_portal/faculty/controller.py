from __future__ import annotations

from flask import Blueprint, Flask

from ..auth.guard import Guard, ensure_allowed
from ..auth.policy import Resource, ResourceKind
from ..common.http import json_body, success
from ..container import Container
from ..core.enums import Action


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("teacher", __name__, url_prefix="/api/teacher")
    guard = Guard(container.auth_service)
    faculty = container.faculty_service
    attendance = container.attendance_service

    def own_record(email: str, action: Action = Action.READ) -> None:
        ensure_allowed(Resource(ResourceKind.FACULTY_RECORD, owner_email=email), action)

    @bp.get("/profile/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.READ)
    def profile(email: str):
        own_record(email)
        return success(faculty=faculty.get_profile(email).to_dict())

    @bp.put("/profile/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.UPDATE)
    def update_profile(email: str):
        own_record(email, Action.UPDATE)
        updated = faculty.update_profile(email, json_body())
        return success("Profile updated successfully", faculty=updated.to_dict())

    @bp.get("/subjects/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.READ)
    def subjects(email: str):
        own_record(email)
        return success(subjects=[d.to_dict() for d in faculty.subjects(email)])

    @bp.get("/students/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.READ)
    def students(email: str):
        own_record(email)
        return success(students=[s.to_dict() for s in faculty.students(email)])

    @bp.get("/attendance/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.READ)
    def attendance_history(email: str):
        own_record(email)
        return success(attendance=[r.to_dict() for r in attendance.faculty_history(email)])

    @bp.get("/attendance-stats/<email>")
    @guard.requires(ResourceKind.FACULTY_RECORD, Action.READ)
    def attendance_stats(email: str):
        own_record(email)
        return success(stats=[s.to_dict() for s in attendance.faculty_subject_stats(email)])

    app.register_blueprint(bp)
