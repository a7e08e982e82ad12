from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, Optional, TypeVar

from ..common.datetime_utils import iso

T = TypeVar("T")


@dataclass(frozen=True)
class AdminProfile:
    admin_id: int
    name: str
    email: str
    university_id: Optional[str] = None
    dob: Optional[date] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.admin_id,
            "name": self.name,
            "email": self.email,
            "univId": self.university_id,
            "dob": iso(self.dob),
            "createdAt": iso(self.created_at),
        }


@dataclass(frozen=True)
class ProvisionResult(Generic[T]):
    """A provisioned record plus the one-time link the person uses to set a password.

    The link is None when initial passwords are derived from the date of birth.
    """

    record: T
    password_setup_link: Optional[str] = None
