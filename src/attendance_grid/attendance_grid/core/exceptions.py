class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class UpstreamError(DomainError):
    """Raised when the upstream API is unreachable or answers with a non-2xx status."""


class InvalidTransition(DomainError):
    """Raised when a board state change is not allowed from the current phase."""
