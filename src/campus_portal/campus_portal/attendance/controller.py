from __future__ import annotations

from flask import Blueprint, Flask

from ..auth.guard import Guard, ensure_allowed
from ..auth.policy import Resource, ResourceKind
from ..common.datetime_utils import parse_iso_date, parse_optional_date
from ..common.http import json_body, success
from ..common.validators import require_bool, require_email, require_int
from ..container import Container
from ..core.enums import Action
from ..core.exceptions import ValidationError
from .model import AttendanceMark


def _parse_marks(entries) -> list[AttendanceMark]:
    if not isinstance(entries, list) or not entries:
        raise ValidationError("Student attendances must be a non-empty array")

    marks = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValidationError("Each student attendance must be an object")
        remarks = entry.get("remarks")
        marks.append(
            AttendanceMark(
                student_email=require_email(entry.get("studentEmail"), "Student email"),
                present=require_bool(entry.get("present"), "present"),
                remarks=str(remarks) if remarks not in (None, "") else None,
            )
        )
    return marks


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("attendance", __name__, url_prefix="/api/attendance")
    guard = Guard(container.auth_service)
    svc = container.attendance_service
    enrollments = container.enrollment_service

    @bp.post("/bulk")
    @guard.requires(ResourceKind.ATTENDANCE, Action.CREATE)
    def mark_bulk():
        data = json_body()
        if not data.get("facultyEmail") or data.get("subjectId") in (None, "") or "studentAttendances" not in data:
            raise ValidationError("Faculty email, subject ID, and student attendances are required")

        marks = _parse_marks(data.get("studentAttendances"))
        faculty_email = require_email(data.get("facultyEmail"), "Faculty email")
        subject_id = require_int(data.get("subjectId"), "Subject ID")
        day = parse_optional_date(data.get("date"))

        ensure_allowed(Resource(ResourceKind.ATTENDANCE, owner_email=faculty_email), Action.CREATE)

        records = svc.mark_bulk(faculty_email=faculty_email, subject_id=subject_id, marks=marks, day=day)
        return success("Bulk attendance marked successfully", attendance=[r.to_dict() for r in records])

    @bp.get("/subject/<subject_id>/date/<day>")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def subject_on_date(subject_id: str, day: str):
        rows = svc.roster_for_date(require_int(subject_id, "Subject ID"), parse_iso_date(day))
        return success(attendance=[r.to_dict() for r in rows])

    @bp.get("/faculty/<email>/subjects")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def faculty_subjects(email: str):
        email = require_email(email)
        return success(subjects=[d.to_dict() for d in enrollments.list_by_faculty(email)])

    @bp.get("/subject/<subject_id>/students")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def subject_students(subject_id: str):
        detail = enrollments.get_detail(require_int(subject_id, "Subject ID"))
        return success(subject=detail.to_dict())

    @bp.get("/stats/subject/<subject_id>")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def subject_stats(subject_id: str):
        stats = svc.subject_stats(require_int(subject_id, "Subject ID"))
        return success(stats=stats.to_dict())

    @bp.get("/student/<email>")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def student_history(email: str):
        return success(attendance=[r.to_dict() for r in svc.student_history(email)])

    @bp.get("/student/<email>/subjects")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def student_subjects(email: str):
        return success(subjects=[d.to_dict() for d in enrollments.list_by_student(email)])

    @bp.get("/student/<email>/subject/<subject_id>")
    @guard.requires(ResourceKind.ATTENDANCE, Action.READ)
    def student_subject_history(email: str, subject_id: str):
        rows = svc.student_history(email, require_int(subject_id, "Subject ID"))
        return success(attendance=[r.to_dict() for r in rows])

    app.register_blueprint(bp)
