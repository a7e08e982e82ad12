from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..auth.policy import Resource, ResourceKind, authorize
from ..core.enums import DASHBOARD_BY_ROLE, Action, Decision, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, BusinessRuleError
from ..identity.verifier import IdentityVerifier
from .model import User
from .repository import UserRepository


@dataclass(frozen=True)
class LoginResult:
    """What the client receives after exchanging an ID token."""

    user: User
    id_token: str
    redirect_url: str


class AuthService:
    """Use case: resolve a bearer credential into a local User."""

    def __init__(self, users: UserRepository, identity: IdentityVerifier):
        self._users = users
        self._identity = identity

    def authenticate_token(self, id_token: str) -> User:
        verified = self._identity.verify_token(id_token)
        user = self._users.get_by_identity_uid(verified.uid)
        if not user:
            raise AuthenticationError("User not found in database")
        return user

    def login(self, id_token: str) -> LoginResult:
        user = self.authenticate_token(id_token)
        redirect_url = DASHBOARD_BY_ROLE.get(user.role)
        if not redirect_url:
            raise AuthenticationError("Unknown user role")
        return LoginResult(user=user, id_token=id_token, redirect_url=redirect_url)

    def check_access(self, id_token: str, requested_uid: str) -> None:
        user = self.authenticate_token(id_token)
        decision = authorize(user, Resource(ResourceKind.ACCOUNT, owner_uid=requested_uid), Action.READ)
        if decision != Decision.ALLOW:
            raise AuthorizationError("Access denied: You can only access your own data")


class UserService:
    """Use case: pair local User rows with identity-provider accounts."""

    def __init__(self, users: UserRepository, identity: IdentityVerifier):
        self._users = users
        self._identity = identity

    def is_registered(self, email: str) -> bool:
        return self._users.get_by_email(email) is not None

    def provision_account(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: Role,
        university_id: Optional[str],
    ) -> User:
        """Create the identity account, then the User row.

        An email that already has a User row, of any role, is refused. An
        identity account with that email but no User row is an orphan and the
        provider replaces it. If the row cannot be written the new identity
        account is deleted again.
        """

        if self.is_registered(email):
            raise BusinessRuleError("Email already exists")

        uid = self._identity.create_account(email=email, password=password, display_name=name)
        try:
            user_id = self._users.create_user(
                identity_uid=uid,
                email=email,
                name=name,
                role=role,
                university_id=university_id,
            )
        except Exception:
            self._identity.delete_account(uid)
            raise

        return User(user_id=user_id, identity_uid=uid, email=email, name=name, role=role, university_id=university_id)

    def remove_account(self, email: str) -> bool:
        """Delete the User row, then its identity account."""

        user = self._users.get_by_email(email)
        if not user:
            return False
        self._users.delete_by_email(email)
        self._identity.delete_account(user.identity_uid)
        return True

    def password_setup_link(self, email: str) -> Optional[str]:
        return self._identity.password_setup_link(email)
