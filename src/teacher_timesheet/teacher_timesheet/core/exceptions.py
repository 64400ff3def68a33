class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(DomainError):
    """Raised when input data is malformed or missing."""

    status_code = 400
    default_message = "Invalid input"


class NotFoundError(DomainError):
    """Raised when an id does not match any stored record."""

    status_code = 404
    default_message = "Not found"


class ConflictError(DomainError):
    """Raised on an invalid state transition (already checked in, PIN already set up)."""

    status_code = 400
    default_message = "Invalid state"


class UnauthorizedError(DomainError):
    """Raised when a PIN does not match the stored hash."""

    status_code = 401
    default_message = "Invalid PIN"


class ForbiddenError(DomainError):
    """Raised when a gated operation is attempted without an admin session."""

    status_code = 403
    default_message = "Admin access required"


class TooManyAttemptsError(DomainError):
    """Raised while PIN validation is locked out after repeated failures."""

    status_code = 429
    default_message = "Too many failed PIN attempts, try again later"


class InternalError(DomainError):
    """Raised when the storage backend fails."""

    status_code = 500
    default_message = "Internal server error"
