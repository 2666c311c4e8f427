"""
Sendly Exceptions

Typed failures raised by the Sendly client. Every HTTP or transport failure is
classified into one of these before it reaches the caller.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    NETWORK = "network"
    GENERIC = "generic"


class SendlyError(Exception):
    """Base exception for all Sendly API errors"""

    kind = ErrorKind.GENERIC
    error_code: Optional[str] = None
    default_message = ""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None,
                 details: Any = None):
        self.message = self.default_message if message is None else message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

    def __repr__(self):
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code!r})"


class AuthenticationError(SendlyError):
    """The API key is invalid or missing (401)"""

    kind = ErrorKind.AUTHENTICATION
    error_code = "AUTHENTICATION_ERROR"
    default_message = "Invalid or missing API key"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 401)


class InsufficientCreditsError(SendlyError):
    """The account does not have enough credits (402)"""

    kind = ErrorKind.INSUFFICIENT_CREDITS
    error_code = "INSUFFICIENT_CREDITS"
    default_message = "Insufficient credits"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 402)


class NotFoundError(SendlyError):
    """The requested resource does not exist (404)"""

    kind = ErrorKind.NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, 404)


class RateLimitError(SendlyError):
    """Too many requests (429). ``retry_after`` is in seconds."""

    kind = ErrorKind.RATE_LIMIT
    error_code = "RATE_LIMIT_EXCEEDED"
    default_message = "Rate limit exceeded"

    def __init__(self, message: Optional[str] = None, retry_after: int = 0):
        super().__init__(message, 429)
        self.retry_after = retry_after


class ValidationError(SendlyError):
    """
    Invalid request parameters.

    Raised both by local input checks and by HTTP 400/422 responses.
    ``local`` is True when the request never left the client.
    """

    kind = ErrorKind.VALIDATION
    error_code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    def __init__(self, message: Optional[str] = None, details: Any = None,
                 status_code: int = 400, local: bool = True):
        super().__init__(message, status_code, details)
        self.local = local


class NetworkError(SendlyError):
    """A connection-level failure occurred before any HTTP response"""

    kind = ErrorKind.NETWORK
    error_code = "NETWORK_ERROR"
    default_message = "Network error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, None)


class WebhookSignatureError(Exception):
    """Webhook signature verification or event structure check failed"""

    def __init__(self, message: str = "Invalid webhook signature"):
        self.message = message
        super().__init__(message)


# Errors that are raised on first occurrence without further attempts
NON_RETRYABLE_ERRORS = (
    AuthenticationError,
    InsufficientCreditsError,
    NotFoundError,
    RateLimitError,
    ValidationError,
)


def is_retryable(error: SendlyError) -> bool:
    """Network failures and unclassified server errors are retried"""
    return not isinstance(error, NON_RETRYABLE_ERRORS)
