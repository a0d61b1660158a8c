class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when a credential is missing, invalid or expired."""

    code = "unauthorized"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"


class NotFoundError(DomainError):
    """Raised when a referenced resource does not exist."""

    code = "not_found"


class ConflictError(DomainError):
    """Raised when a write collides with existing state."""

    code = "conflict"


class AlreadyCheckedIn(ConflictError):
    code = "already_checked_in"


class NoOpenSession(ValidationError):
    code = "no_open_session"
