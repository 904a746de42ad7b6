"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP
responses by centralized exception handlers in main.py, so services stay
HTTP-agnostic and can be reused from scripts or background tasks.

Every exception carries a correlation ID for Sentry and user error reports.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message, safe to return to the caller.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        # Use request correlation ID if available, otherwise generate new one
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when input validation fails."""

    pass


class InvalidJSONException(ValidationException):
    """Request body could not be decoded as JSON."""

    def __init__(self, message: str = "Invalid JSON in request body"):
        super().__init__(message)


class InvalidShareEventException(ValidationException):
    """Share event payload is missing a field or has an out-of-range value."""

    def __init__(
        self, message: str = "Invalid request. Missing or invalid required fields."
    ):
        super().__init__(message)


class InvalidShareQueryException(ValidationException):
    """Statistics or share-link query parameters are missing or invalid."""

    def __init__(
        self, message: str = "Missing or invalid contentId or contentType parameter"
    ):
        super().__init__(message)


# ============================================================================
# Rate Limiting Exceptions
# ============================================================================


class RateLimitExceededException(DomainException):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded. Please try again later.",
        retry_after: int | None = None,
    ):
        super().__init__(message)
        self.retry_after = retry_after
