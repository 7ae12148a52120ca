class DomainError(Exception):
    """Base exception for business rule violations."""
    status_code = 400


class ValidationError(DomainError):
    """Raised when input data is missing or violates domain rules."""
    status_code = 400


class AuthenticationError(DomainError):
    """Raised when login credentials or tokens are invalid."""
    status_code = 401


class AuthorizationError(DomainError):
    """Raised when an account is not allowed to perform an action."""
    status_code = 403


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""
    status_code = 404


class ExpiredError(DomainError):
    """Raised when a time-limited credential is past its expiry."""
    status_code = 410


class StorageError(Exception):
    """Raised when a backing file cannot be read or written."""
