from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import iso


@dataclass(frozen=True)
class Faculty:
    faculty_id: int
    email: str
    name: str
    department: str
    university_id: Optional[str] = None
    dob: Optional[date] = None
    contact_no: Optional[int] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    blood_group: Optional[str] = None
    has_image: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.faculty_id,
            "email": self.email,
            "name": self.name,
            "department": self.department,
            "univId": self.university_id,
            "dob": iso(self.dob),
            "contactNo": self.contact_no,
            "address": self.address,
            "gender": self.gender,
            "nationality": self.nationality,
            "bloodGroup": self.blood_group,
            "hasImage": self.has_image,
            "createdAt": iso(self.created_at),
        }


@dataclass(frozen=True)
class NewFaculty:
    email: str
    name: str
    department: str
    university_id: Optional[str] = None
    dob: Optional[date] = None
    contact_no: Optional[int] = None
    address: Optional[str] = None
    gender: Optional[str] = None
    nationality: Optional[str] = None
    blood_group: Optional[str] = None


UPDATABLE_FIELDS = {
    "name": "name",
    "department": "department",
    "dob": "dob",
    "contactNo": "contact_no",
    "address": "address",
    "gender": "gender",
    "nationality": "nationality",
    "bloodGroup": "blood_group",
}
