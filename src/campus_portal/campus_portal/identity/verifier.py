from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol


@dataclass(frozen=True)
class VerifiedIdentity:
    """Result of a successful bearer-token verification."""

    uid: str
    email: Optional[str] = None
    claims: dict = field(default_factory=dict)


class IdentityVerifier(Protocol):
    """External identity provider.

    Token verification raises AuthenticationError; account administration
    raises IdentityProviderError.
    """

    def verify_token(self, token: str) -> VerifiedIdentity:
        raise NotImplementedError

    def create_account(self, *, email: str, password: str, display_name: str) -> str:
        raise NotImplementedError

    def delete_account(self, uid: str) -> None:
        raise NotImplementedError

    def password_setup_link(self, email: str) -> Optional[str]:
        raise NotImplementedError
