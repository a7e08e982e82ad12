from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import iso
from ..faculty.model import Faculty
from ..students.model import Student


@dataclass(frozen=True)
class SubjectEnrollment:
    """Domain entity: a taught course offering."""

    enrollment_id: int
    subject_name: str
    subject_code: str
    credits: int
    faculty_email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.enrollment_id,
            "subjectName": self.subject_name,
            "subjectCode": self.subject_code,
            "credits": self.credits,
            "facultyEmail": self.faculty_email,
            "createdAt": iso(self.created_at),
            "updatedAt": iso(self.updated_at),
        }


@dataclass(frozen=True)
class SubjectDescriptor:
    subject_name: str
    subject_code: str
    credits: int


@dataclass(frozen=True)
class EnrollmentDetail:
    """Read-model: enrollment with its teacher and roster."""

    enrollment: SubjectEnrollment
    faculty: Optional[Faculty]
    students: list[Student] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = self.enrollment.to_dict()
        out["faculty"] = self.faculty.to_dict() if self.faculty else None
        out["enrolledStudents"] = [s.to_dict() for s in self.students]
        return out
