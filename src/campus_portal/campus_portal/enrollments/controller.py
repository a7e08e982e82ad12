from __future__ import annotations

from flask import Blueprint, Flask

from ..auth.guard import Guard, ensure_allowed
from ..auth.policy import Resource, ResourceKind
from ..common.http import error, json_body, success
from ..common.validators import require_email
from ..container import Container
from ..core.enums import Action
from ..core.exceptions import NotFoundError, ValidationError
from .service import make_descriptor


def _missing(data: dict, *keys: str) -> bool:
    return any(data.get(k) in (None, "") for k in keys)


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("subject_enrollment", __name__, url_prefix="/api/subject-enrollment")
    guard = Guard(container.auth_service)
    svc = container.enrollment_service

    def owned_by_caller(enrollment_id: int, action: Action) -> None:
        detail = svc.find_detail(enrollment_id)
        if detail is None:
            raise NotFoundError("Enrollment not found")
        ensure_allowed(Resource(ResourceKind.ENROLLMENT, owner_email=detail.enrollment.faculty_email), action)

    @bp.post("/create-all")
    @guard.requires(ResourceKind.ENROLLMENT, Action.CREATE)
    def create_all():
        data = json_body()
        if _missing(data, "emailId", "subjectName", "subjectCode", "credits"):
            raise ValidationError("Email ID, subject name, subject code, and credits are required")

        faculty_email = require_email(data["emailId"])
        ensure_allowed(Resource(ResourceKind.ENROLLMENT, owner_email=faculty_email), Action.CREATE)

        detail = svc.create_for_all_students(
            faculty_email=faculty_email,
            descriptor=make_descriptor(data["subjectName"], data["subjectCode"], data["credits"]),
        )
        return success("Enrollment created for all students successfully", status=201, enrollment=detail.to_dict())

    @bp.post("/create-specific")
    @guard.requires(ResourceKind.ENROLLMENT, Action.CREATE)
    def create_specific():
        data = json_body()
        if _missing(data, "emailId", "subjectName", "subjectCode", "credits") or "studentEmails" not in data:
            raise ValidationError(
                "Email ID, subject name, subject code, credits, and student emails array are required"
            )

        faculty_email = require_email(data["emailId"], "Faculty email")
        emails = data["studentEmails"]
        if not isinstance(emails, list) or not emails:
            raise ValidationError("At least one student email is required")
        emails = [require_email(e, "Student email") for e in emails]

        ensure_allowed(Resource(ResourceKind.ENROLLMENT, owner_email=faculty_email), Action.CREATE)

        detail = svc.create_for_specific_students(
            faculty_email=faculty_email,
            descriptor=make_descriptor(data["subjectName"], data["subjectCode"], data["credits"]),
            student_emails=emails,
        )
        return success(
            "Enrollment created for specific students successfully", status=201, enrollment=detail.to_dict()
        )

    @bp.get("/")
    @guard.requires(ResourceKind.ENROLLMENT, Action.READ)
    def list_all():
        return success(enrollments=[d.to_dict() for d in svc.list_all()])

    @bp.get("/<int:enrollment_id>")
    @guard.requires(ResourceKind.ENROLLMENT, Action.READ)
    def get_one(enrollment_id: int):
        return success(enrollment=svc.get_detail(enrollment_id).to_dict())

    @bp.get("/faculty/<email>")
    @guard.requires(ResourceKind.ENROLLMENT, Action.READ)
    def by_faculty(email: str):
        return success(enrollments=[d.to_dict() for d in svc.list_by_faculty(email)])

    @bp.get("/student/<email>")
    @guard.requires(ResourceKind.ENROLLMENT, Action.READ)
    def by_student(email: str):
        return success(enrollments=[d.to_dict() for d in svc.list_by_student(email)])

    @bp.post("/<int:enrollment_id>/add-student")
    @guard.requires(ResourceKind.ENROLLMENT, Action.UPDATE)
    def add_student(enrollment_id: int):
        student_email = require_email(json_body().get("studentEmail"), "Student email")
        owned_by_caller(enrollment_id, Action.UPDATE)

        if not svc.add_student(enrollment_id, student_email):
            return error("Enrollment or student not found", 404)
        return success("Student added to enrollment successfully")

    @bp.delete("/<int:enrollment_id>/remove-student")
    @guard.requires(ResourceKind.ENROLLMENT, Action.UPDATE)
    def remove_student(enrollment_id: int):
        student_email = require_email(json_body().get("studentEmail"), "Student email")
        owned_by_caller(enrollment_id, Action.UPDATE)

        if not svc.remove_student(enrollment_id, student_email):
            return error("Enrollment or student not found", 404)
        return success("Student removed from enrollment successfully")

    @bp.put("/<int:enrollment_id>")
    @guard.requires(ResourceKind.ENROLLMENT, Action.UPDATE)
    def update(enrollment_id: int):
        owned_by_caller(enrollment_id, Action.UPDATE)
        detail = svc.update(enrollment_id, json_body())
        if detail is None:
            raise NotFoundError("Enrollment not found")
        return success("Enrollment updated successfully", enrollment=detail.to_dict())

    @bp.delete("/<int:enrollment_id>")
    @guard.requires(ResourceKind.ENROLLMENT, Action.DELETE)
    def delete(enrollment_id: int):
        owned_by_caller(enrollment_id, Action.DELETE)
        if not svc.delete(enrollment_id):
            raise NotFoundError("Enrollment not found")
        return success("Enrollment deleted successfully")

    app.register_blueprint(bp)
