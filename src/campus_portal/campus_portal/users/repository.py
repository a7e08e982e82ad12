from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_identity_uid(self, identity_uid: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        identity_uid: str,
        email: str,
        name: str,
        role: Role,
        university_id: Optional[str],
    ) -> int:
        raise NotImplementedError

    def delete_by_email(self, email: str) -> bool:
        raise NotImplementedError
