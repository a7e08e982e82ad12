from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: login account paired with an identity-provider subject.

    Note: Pure data object (no DB access code).
    """

    user_id: int
    identity_uid: str
    email: str
    name: str
    role: Role
    university_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "firebaseUid": self.identity_uid,
            "univId": self.university_id,
        }
