class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 500


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class PayloadTooLargeError(ValidationError):
    """Raised when an uploaded file exceeds its size ceiling."""

    status_code = 413


class BusinessRuleError(DomainError):
    """Raised when a request is well formed but conflicts with stored state."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when the bearer credential is missing, invalid or expired."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""

    status_code = 404


class IdentityProviderError(DomainError):
    """Raised when the identity provider rejects an account operation."""

    status_code = 502
