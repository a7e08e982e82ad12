from __future__ import annotations

from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from firebase_admin.exceptions import FirebaseError

from ..core.exceptions import AuthenticationError, IdentityProviderError
from .verifier import IdentityVerifier, VerifiedIdentity

_SERVICE_ACCOUNT_FIELDS = ("project_id", "private_key_id", "private_key", "client_email", "client_id")


def service_account_from_config(firebase_config: dict) -> Optional[dict]:
    """Build a service-account dict from individual settings, if all are present."""

    if not all(firebase_config.get(k) for k in _SERVICE_ACCOUNT_FIELDS):
        return None
    return {
        "type": "service_account",
        "project_id": firebase_config["project_id"],
        "private_key_id": firebase_config["private_key_id"],
        "private_key": str(firebase_config["private_key"]).replace("\\n", "\n"),
        "client_email": firebase_config["client_email"],
        "client_id": firebase_config["client_id"],
        "auth_uri": firebase_config.get("auth_uri") or "https://accounts.google.com/o/oauth2/auth",
        "token_uri": firebase_config.get("token_uri") or "https://oauth2.googleapis.com/token",
    }


class FirebaseIdentityClient(IdentityVerifier):
    """Identity provider handle backed by a named firebase_admin app.

    The handle owns its firebase app: `initialize()` creates it, `close()`
    deletes it. Nothing is registered as the SDK's default app.
    """

    def __init__(self, firebase_config: dict, *, app_name: str = "campus-portal"):
        self._config = dict(firebase_config)
        self._app_name = app_name
        self._app: Optional[firebase_admin.App] = None

    @property
    def initialized(self) -> bool:
        return self._app is not None

    def _credential(self):
        credentials_file = self._config.get("credentials_file")
        if credentials_file:
            return credentials.Certificate(credentials_file)
        service_account = service_account_from_config(self._config)
        if service_account:
            return credentials.Certificate(service_account)
        return credentials.ApplicationDefault()

    def initialize(self) -> "FirebaseIdentityClient":
        if self._app is None:
            options = {"projectId": self._config["project_id"]} if self._config.get("project_id") else None
            self._app = firebase_admin.initialize_app(self._credential(), options, name=self._app_name)
        return self

    def close(self) -> None:
        if self._app is not None:
            firebase_admin.delete_app(self._app)
            self._app = None

    def __enter__(self) -> "FirebaseIdentityClient":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _require_app(self) -> firebase_admin.App:
        if self._app is None:
            raise IdentityProviderError("Identity provider client is not initialized")
        return self._app

    def verify_token(self, token: str) -> VerifiedIdentity:
        if not token or not isinstance(token, str):
            raise AuthenticationError("ID token is required and must be a string")

        try:
            decoded = auth.verify_id_token(token, app=self._require_app())
        except auth.ExpiredIdTokenError:
            raise AuthenticationError("ID token has expired")
        except auth.RevokedIdTokenError:
            raise AuthenticationError("ID token has been revoked")
        except auth.InvalidIdTokenError:
            raise AuthenticationError("Invalid ID token")
        except (ValueError, FirebaseError) as e:
            raise AuthenticationError(f"Token verification failed: {e}")

        return VerifiedIdentity(uid=str(decoded["uid"]), email=decoded.get("email"), claims=dict(decoded))

    def create_account(self, *, email: str, password: str, display_name: str) -> str:
        app = self._require_app()

        # A stale account with the same email would make create_user fail.
        try:
            existing = auth.get_user_by_email(email, app=app)
            auth.delete_user(existing.uid, app=app)
        except auth.UserNotFoundError:
            pass
        except (ValueError, FirebaseError) as e:
            raise IdentityProviderError(f"Failed to look up identity account: {e}")

        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                email_verified=True,
                app=app,
            )
        except (ValueError, FirebaseError) as e:
            raise IdentityProviderError(f"Failed to create identity account: {e}")
        return str(record.uid)

    def delete_account(self, uid: str) -> None:
        try:
            auth.delete_user(uid, app=self._require_app())
        except auth.UserNotFoundError:
            return
        except (ValueError, FirebaseError) as e:
            raise IdentityProviderError(f"Failed to delete identity account: {e}")

    def password_setup_link(self, email: str) -> Optional[str]:
        try:
            return auth.generate_password_reset_link(email, app=self._require_app())
        except (ValueError, FirebaseError) as e:
            raise IdentityProviderError(f"Failed to generate password setup link: {e}")
