import pytest

from sendly import (
    AuthenticationError,
    ErrorKind,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SendlyError,
    ValidationError,
    WebhookSignatureError,
)
from sendly.exceptions import is_retryable


@pytest.mark.parametrize("error, status_code, code, kind, message", [
    (AuthenticationError(), 401, "AUTHENTICATION_ERROR", ErrorKind.AUTHENTICATION, "Invalid or missing API key"),
    (InsufficientCreditsError(), 402, "INSUFFICIENT_CREDITS", ErrorKind.INSUFFICIENT_CREDITS, "Insufficient credits"),
    (NotFoundError(), 404, "NOT_FOUND", ErrorKind.NOT_FOUND, "Resource not found"),
    (RateLimitError(), 429, "RATE_LIMIT_EXCEEDED", ErrorKind.RATE_LIMIT, "Rate limit exceeded"),
    (ValidationError(), 400, "VALIDATION_ERROR", ErrorKind.VALIDATION, "Validation failed"),
    (NetworkError(), None, "NETWORK_ERROR", ErrorKind.NETWORK, "Network error occurred"),
])
def test_error_defaults(error, status_code, code, kind, message):
    assert isinstance(error, SendlyError)
    assert error.status_code == status_code
    assert error.error_code == code
    assert error.kind is kind
    assert error.message == message
    assert str(error) == message


def test_generic_error():
    error = SendlyError("Internal error", 500)

    assert error.kind is ErrorKind.GENERIC
    assert error.error_code is None
    assert error.status_code == 500
    assert repr(error) == "SendlyError(message='Internal error', status_code=500)"


def test_explicit_empty_message_is_kept():
    assert NotFoundError("").message == ""


def test_rate_limit_retry_after():
    assert RateLimitError().retry_after == 0
    assert RateLimitError("Slow down", retry_after=30).retry_after == 30


def test_server_validation_error():
    error = ValidationError("Invalid", details={"to": "bad"}, status_code=422, local=False)

    assert error.status_code == 422
    assert error.details == {"to": "bad"}
    assert error.local is False
    assert ValidationError("x").local is True


@pytest.mark.parametrize("error, expected", [
    (NetworkError("Connection failed"), True),
    (SendlyError("boom", 500), True),
    (SendlyError("teapot", 418), True),
    (AuthenticationError(), False),
    (InsufficientCreditsError(), False),
    (NotFoundError(), False),
    (RateLimitError(), False),
    (ValidationError(), False),
])
def test_is_retryable(error, expected):
    assert is_retryable(error) is expected


def test_webhook_signature_error_is_separate_from_api_errors():
    error = WebhookSignatureError()

    assert not isinstance(error, SendlyError)
    assert error.message == "Invalid webhook signature"
    assert WebhookSignatureError("Invalid event structure").message == "Invalid event structure"
