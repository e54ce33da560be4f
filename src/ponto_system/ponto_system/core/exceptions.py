class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the actor is unknown or login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when a referenced id does not exist."""


class ExternalServiceError(DomainError):
    """Raised when a collaborator outside the app failed (location, database).

    The operation is aborted and nothing is recorded; the user may retry.
    """
