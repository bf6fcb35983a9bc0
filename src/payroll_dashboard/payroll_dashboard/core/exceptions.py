class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the request carries no usable session."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced period, branch or record does not exist."""


class PeriodFinalizedError(DomainError):
    """Raised when a finalized payroll period would be regenerated."""


class ConfigurationError(DomainError):
    """Raised when business configuration does not fit the requested run."""
