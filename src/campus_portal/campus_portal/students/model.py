from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class Student:
    """Domain entity: Student profile (image bytes are loaded separately)."""

    student_id: int
    email: str
    name: str
    course: str
    branch: str
    semester: int
    year: int
    roll_no: Optional[str] = None
    university_id: Optional[str] = None
    enrollment_code: Optional[str] = None
    enrollment_completed: Optional[bool] = None
    dob: Optional[date] = None
    contact_no: Optional[int] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    blood_group: Optional[str] = None
    parent_contact_no: Optional[int] = None
    parent_name: Optional[str] = None
    parent_occupation: Optional[str] = None
    has_image: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "email": self.email,
            "name": self.name,
            "course": self.course,
            "branch": self.branch,
            "semester": self.semester,
            "year": self.year,
            "rollNo": self.roll_no,
            "univId": self.university_id,
            "enrollmentCode": self.enrollment_code,
            "enrollmentCompleted": self.enrollment_completed,
            "dob": iso(self.dob),
            "contactNo": self.contact_no,
            "address": self.address,
            "gender": self.gender,
            "nationality": self.nationality,
            "bloodGroup": self.blood_group,
            "parentContactNo": self.parent_contact_no,
            "parentName": self.parent_name,
            "parentOccupation": self.parent_occupation,
            "hasImage": self.has_image,
            "createdAt": iso(self.created_at),
        }


@dataclass(frozen=True)
class NewStudent:
    """Input for provisioning a student (before id/roll number exist)."""

    email: str
    name: str
    course: str
    branch: str
    semester: int
    year: int
    roll_no: Optional[str] = None
    university_id: Optional[str] = None
    enrollment_code: Optional[str] = None
    enrollment_completed: Optional[bool] = None
    dob: Optional[date] = None
    contact_no: Optional[int] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    blood_group: Optional[str] = None
    parent_contact_no: Optional[int] = None
    parent_name: Optional[str] = None
    parent_occupation: Optional[str] = None


# API field -> column. Email is the join key to users/rosters and cannot change.
UPDATABLE_FIELDS = {
    "name": "name",
    "course": "course",
    "branch": "branch",
    "semester": "semester",
    "year": "year",
    "rollNo": "roll_no",
    "enrollmentCode": "enrollment_code",
    "enrollmentCompleted": "enrollment_completed",
    "dob": "dob",
    "contactNo": "contact_no",
    "address": "address",
    "gender": "gender",
    "nationality": "nationality",
    "bloodGroup": "blood_group",
    "parentContactNo": "parent_contact_no",
    "parentName": "parent_name",
    "parentOccupation": "parent_occupation",
}
