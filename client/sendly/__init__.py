"""
Sendly Client

A Python client library for the Sendly SMS API.
"""

__version__ = "1.0.5"

from .api_caller import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    Sendly,
    SendlyConfig,
    get_default_config_path,
    send_sms,
)
from .exceptions import (
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
from .models import (
    Account,
    AccountLimits,
    AccountVerification,
    ApiKey,
    CreditTransaction,
    Credits,
    MediaFile,
    Message,
    MessageList,
)
from .webhooks import (
    SIGNATURE_HEADER,
    WebhookEvent,
    WebhookMessageData,
    generate_signature,
    parse_event,
    verify_signature,
)

__all__ = [
    'Sendly',
    'SendlyConfig',
    'send_sms',
    'get_default_config_path',
    'DEFAULT_BASE_URL',
    'DEFAULT_TIMEOUT',
    'ErrorKind',
    'SendlyError',
    'AuthenticationError',
    'InsufficientCreditsError',
    'NetworkError',
    'NotFoundError',
    'RateLimitError',
    'ValidationError',
    'WebhookSignatureError',
    'Account',
    'AccountLimits',
    'AccountVerification',
    'ApiKey',
    'CreditTransaction',
    'Credits',
    'MediaFile',
    'Message',
    'MessageList',
    'SIGNATURE_HEADER',
    'WebhookEvent',
    'WebhookMessageData',
    'generate_signature',
    'parse_event',
    'verify_signature',
]
