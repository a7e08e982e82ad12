from __future__ import annotations

from flask import Blueprint, Flask

from ..auth.guard import Guard
from ..auth.policy import ResourceKind
from ..common.http import json_body, success, uploaded_file
from ..container import Container
from ..core.enums import Action
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("admin", __name__, url_prefix="/api/admin")
    guard = Guard(container.auth_service)
    svc = container.admin_service

    def admin_only(action: Action):
        return guard.requires(ResourceKind.ADMIN_CONSOLE, action)

    @bp.post("/upload-student-details")
    @admin_only(Action.CREATE)
    def upload_student_details():
        f = uploaded_file("file")
        if f is None:
            raise ValidationError("CSV file is required")

        results = svc.upload_students_bulk(f.read())
        return success(
            f"{len(results)} students uploaded successfully",
            count=len(results),
            students=[
                {"student": r.record.to_dict(), "passwordSetupLink": r.password_setup_link}
                for r in results
            ],
        )

    @bp.post("/upload-student")
    @admin_only(Action.CREATE)
    def upload_student():
        data = json_body()
        if not data.get("name") or not data.get("email"):
            raise ValidationError("Name and email are required")

        result = svc.upload_student_detail(data)
        return success(
            "Student uploaded successfully",
            student=result.record.to_dict(),
            passwordSetupLink=result.password_setup_link,
        )

    @bp.post("/upload-faculty")
    @admin_only(Action.CREATE)
    def upload_faculty():
        result = svc.upload_faculty_detail(json_body())
        return success(
            "Faculty uploaded successfully",
            faculty=result.record.to_dict(),
            passwordSetupLink=result.password_setup_link,
        )

    @bp.get("/student/<roll_no>")
    @admin_only(Action.READ)
    def get_student(roll_no: str):
        return success(student=svc.get_student(roll_no).to_dict())

    @bp.put("/student/<roll_no>")
    @admin_only(Action.UPDATE)
    def update_student(roll_no: str):
        student = svc.update_student(roll_no, json_body())
        return success("Student updated successfully", student=student.to_dict())

    @bp.delete("/student/<roll_no>")
    @admin_only(Action.DELETE)
    def delete_student(roll_no: str):
        svc.delete_student(roll_no)
        return success("Student deleted successfully")

    @bp.get("/faculty/<email>")
    @admin_only(Action.READ)
    def get_faculty(email: str):
        return success(faculty=svc.get_faculty(email).to_dict())

    @bp.put("/faculty/<email>")
    @admin_only(Action.UPDATE)
    def update_faculty(email: str):
        faculty = svc.update_faculty(email, json_body())
        return success("Faculty updated successfully", faculty=faculty.to_dict())

    @bp.delete("/faculty/<email>")
    @admin_only(Action.DELETE)
    def delete_faculty(email: str):
        svc.delete_faculty(email)
        return success("Faculty deleted successfully")

    @bp.get("/students")
    @admin_only(Action.READ)
    def list_students():
        return success(students=[s.to_dict() for s in svc.list_students()])

    @bp.get("/faculty")
    @admin_only(Action.READ)
    def list_faculty():
        return success(faculty=[f.to_dict() for f in svc.list_faculty()])

    app.register_blueprint(bp)
