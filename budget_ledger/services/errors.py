"""Service-layer exceptions. Each carries a short client-safe message and an HTTP status."""


class ServiceError(Exception):
    """Base for errors raised by identity, category, ledger and analytics services."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Raised when input is missing or malformed."""

    status_code = 400


class AuthenticationError(ServiceError):
    """Raised when login credentials do not match (no hint which part was wrong)."""

    status_code = 401


class UnauthenticatedError(ServiceError):
    """Raised when a protected operation is called without a token."""

    status_code = 401


class InvalidTokenError(ServiceError):
    """Raised when a token is malformed, signed with another key, or expired."""

    status_code = 403


class ForbiddenError(ServiceError):
    """Raised when the acting role may not perform the operation."""

    status_code = 403


class NotFoundError(ServiceError):
    """Raised when a resource does not exist or is not owned by the actor."""

    status_code = 404


class ConflictError(ServiceError):
    """Raised when a unique key (email, category name) is already taken."""

    status_code = 409


class InvalidReferenceError(ServiceError):
    """Raised when a foreign reference (e.g. category_id) points at nothing."""

    status_code = 400


class StorageError(ServiceError):
    """Raised when the storage engine fails; message is deliberately opaque."""

    status_code = 500
