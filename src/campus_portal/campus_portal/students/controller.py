from __future__ import annotations

import io

from flask import Blueprint, Flask, request, send_file

from ..auth.guard import Guard, current_principal, ensure_allowed
from ..auth.policy import Resource, ResourceKind
from ..common.datetime_utils import parse_optional_date
from ..common.http import success, uploaded_file
from ..common.validators import require_int
from ..container import Container
from ..core.enums import Action
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("student", __name__, url_prefix="/api/student")
    guard = Guard(container.auth_service)
    students = container.student_service
    attendance = container.attendance_service

    def own_record(email: str, action: Action = Action.READ) -> None:
        ensure_allowed(Resource(ResourceKind.STUDENT_RECORD, owner_email=email), action)

    @bp.get("/profile/<email>")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.READ)
    def profile(email: str):
        own_record(email)
        return success(student=students.get_profile(email).to_dict())

    @bp.get("/subjects/<email>")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.READ)
    def subjects(email: str):
        own_record(email)
        return success(subjects=[d.to_dict() for d in students.subjects(email)])

    @bp.get("/attendance-summary/<email>")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.READ)
    def attendance_summary(email: str):
        own_record(email)
        summary = attendance.student_summary(
            email,
            parse_optional_date(request.args.get("startDate")),
            parse_optional_date(request.args.get("endDate")),
        )
        return success(**summary.to_dict())

    @bp.get("/attendance/<email>/<subject_id>")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.READ)
    def subject_attendance(email: str, subject_id: str):
        own_record(email)
        rows = attendance.student_subject_history(email, require_int(subject_id, "Subject id"))
        return success(attendance=[r.to_dict() for r in rows])

    @bp.post("/upload-image")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.UPDATE)
    def upload_image():
        f = uploaded_file("image")
        if f is None:
            raise ValidationError("Please select an image file")

        email = request.form.get("email") or current_principal().email
        own_record(email, Action.UPDATE)

        data = f.read()
        students.upload_image(email, data)
        return success("Image uploaded successfully", email=email, imageSize=len(data))

    @bp.get("/profile-image/<email>")
    @guard.requires(ResourceKind.STUDENT_RECORD, Action.READ)
    def profile_image(email: str):
        own_record(email)
        data, mimetype = students.get_image(email)
        return send_file(io.BytesIO(data), mimetype=mimetype)

    app.register_blueprint(bp)
