class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(ValidationError):
    """Raised when a uniqueness rule (e.g. username) is violated."""


class NotFoundError(DomainError):
    """Raised when a record id does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when an action targets a protected record."""


class StorageError(Exception):
    """Raised when the persistence backend cannot be read or written."""
