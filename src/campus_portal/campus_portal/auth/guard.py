"""Request guards: bearer-token authentication plus policy checks.

Views run with the authenticated User in `flask.g.principal`.
"""

from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from ..core.enums import Action, Decision
from ..core.exceptions import AuthenticationError, AuthorizationError
from ..users.model import User
from ..users.service import AuthService
from .policy import Resource, authorize


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("No token provided")
    return token.strip()


def current_principal() -> User:
    principal = g.get("principal")
    if principal is None:
        raise AuthenticationError("Not authenticated")
    return principal


def ensure_allowed(resource: Resource, action: Action) -> None:
    if authorize(current_principal(), resource, action) != Decision.ALLOW:
        raise AuthorizationError("Access denied")


class Guard:
    """Decorator factory bound to an AuthService."""

    def __init__(self, auth_service: AuthService):
        self._auth = auth_service

    def _authenticate(self) -> User:
        token = bearer_token()
        try:
            user = self._auth.authenticate_token(token)
        except AuthenticationError as e:
            current_app.logger.warning("Rejected bearer token on %s %s: %s", request.method, request.path, e)
            raise
        g.principal = user
        return user

    def authenticated(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self._authenticate()
            return view(*args, **kwargs)

        return wrapper

    def requires(self, kind: str, action: Action):
        """Authenticate, then require the role table to allow `action` on `kind`.

        Ownership is checked inside the view with `ensure_allowed`.
        """

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                self._authenticate()
                ensure_allowed(Resource(kind), action)
                return view(*args, **kwargs)

            return wrapper

        return decorator
