class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, day or report does not exist."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or no one is logged in."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
