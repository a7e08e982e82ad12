"""Turn request bodies and CSV rows into provisioning inputs."""

from __future__ import annotations

from typing import Any, Mapping

from ..common.fields import coerce_field
from ..common.validators import require_email, require_non_empty
from ..core.constants import DEFAULT_ROLL_BRANCH, DEFAULT_ROLL_YEAR
from ..faculty.model import NewFaculty
from ..students.model import NewStudent


def _opt(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    if isinstance(value, str) and not value.strip():
        return None
    return value


def parse_new_student(data: Mapping[str, Any]) -> NewStudent:
    branch = _opt(data, "branch")
    year = _opt(data, "year")
    return NewStudent(
        email=require_email(data.get("email")),
        name=require_non_empty(data.get("name"), "Name"),
        course=require_non_empty(data.get("course"), "Course"),
        branch=coerce_field("branch", branch) if branch is not None else DEFAULT_ROLL_BRANCH,
        semester=coerce_field("semester", _opt(data, "semester") or 1),
        year=coerce_field("year", year) if year is not None else DEFAULT_ROLL_YEAR,
        roll_no=coerce_field("rollNo", _opt(data, "rollNo")),
        enrollment_code=coerce_field("enrollmentCode", _opt(data, "enrollmentCode")),
        enrollment_completed=coerce_field("enrollmentCompleted", _opt(data, "enrollmentCompleted")),
        dob=coerce_field("dob", _opt(data, "dob")),
        contact_no=coerce_field("contactNo", _opt(data, "contactNo")),
        address=coerce_field("address", _opt(data, "address")),
        gender=coerce_field("gender", _opt(data, "gender")),
        nationality=coerce_field("nationality", _opt(data, "nationality")),
        blood_group=coerce_field("bloodGroup", _opt(data, "bloodGroup")),
        parent_contact_no=coerce_field("parentContactNo", _opt(data, "parentContactNo")),
        parent_name=coerce_field("parentName", _opt(data, "parentName")),
        parent_occupation=coerce_field("parentOccupation", _opt(data, "parentOccupation")),
    )


def parse_new_faculty(data: Mapping[str, Any]) -> NewFaculty:
    return NewFaculty(
        email=require_email(data.get("email")),
        name=require_non_empty(data.get("name"), "Name"),
        department=require_non_empty(data.get("department"), "Department"),
        dob=coerce_field("dob", _opt(data, "dob")),
        contact_no=coerce_field("contactNo", _opt(data, "contactNo")),
        address=coerce_field("address", _opt(data, "address")),
        gender=coerce_field("gender", _opt(data, "gender")),
        nationality=coerce_field("nationality", _opt(data, "nationality")),
        blood_group=coerce_field("bloodGroup", _opt(data, "bloodGroup")),
    )
