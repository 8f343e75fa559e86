"""Error taxonomy shared by the stores, the auth layer and the web app.

Every error the core raises on purpose derives from NotekeepError and carries
the HTTP status the web layer answers with.
"""


class NotekeepError(Exception):
    """Base class for errors surfaced to the caller as ``{"error": message}``."""

    status = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(NotekeepError):
    """Malformed or missing input."""

    status = 400


class AuthenticationError(NotekeepError):
    """Bad credentials on signin."""

    status = 401


class Unauthenticated(NotekeepError):
    """No token was presented."""

    status = 401


class Forbidden(NotekeepError):
    """A token was presented but is invalid, expired, or names a missing user."""

    status = 403


class NotFoundError(NotekeepError):
    """Missing resource, or one owned by somebody else."""

    status = 404


class ConflictError(NotekeepError):
    """Duplicate email on signup."""

    status = 409


class InternalError(NotekeepError):
    """Unexpected I/O or parse failure in persistent storage."""

    status = 500


class InvalidTokenError(Exception):
    """Token signature, payload or expiry check failed.

    Raised by the token layer only; the auth gate turns it into Forbidden.
    """
