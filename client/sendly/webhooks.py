"""
Webhook verification for Sendly

Sendly signs every webhook delivery with HMAC-SHA256 over the raw request body,
using the webhook secret from the dashboard as key. The signature arrives in the
X-Sendly-Signature header as "sha256=<64 lowercase hex characters>".

Usage:
    event = parse_event(request.get_data(), request.headers[SIGNATURE_HEADER], secret)
    if event.type == EVENT_MESSAGE_DELIVERED:
        ...
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from cryptography.hazmat.primitives import constant_time, hashes, hmac

from .exceptions import WebhookSignatureError

SIGNATURE_HEADER = "X-Sendly-Signature"
SIGNATURE_PREFIX = "sha256="
DEFAULT_API_VERSION = "2024-01-01"

EVENT_MESSAGE_QUEUED = "message.queued"
EVENT_MESSAGE_SENT = "message.sent"
EVENT_MESSAGE_DELIVERED = "message.delivered"
EVENT_MESSAGE_FAILED = "message.failed"
EVENT_MESSAGE_BOUNCED = "message.bounced"

REQUIRED_EVENT_FIELDS = ("id", "type", "data", "created_at")

Payload = Union[str, bytes]


def _to_bytes(value: Payload) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def _as_int(value: Any, default: int) -> int:
    # malformed counters fall back to the default
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass(frozen=True)
class WebhookMessageData:
    """Delivery details carried by a message webhook event"""

    message_id: str
    status: str
    to: str
    from_: str = ""
    error: Optional[str] = None
    error_code: Optional[str] = None
    delivered_at: Optional[str] = None
    failed_at: Optional[str] = None
    segments: int = 1
    credits_used: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookMessageData":
        def value(key, default=None):
            found = data.get(key)
            return default if found is None else found

        return cls(
            message_id=value("message_id", ""),
            status=value("status", ""),
            to=value("to", ""),
            from_=value("from", ""),
            error=value("error"),
            error_code=value("error_code"),
            delivered_at=value("delivered_at"),
            failed_at=value("failed_at"),
            segments=_as_int(data.get("segments"), 1),
            credits_used=_as_int(data.get("credits_used"), 0),
        )


@dataclass(frozen=True)
class WebhookEvent:
    """A verified webhook event"""

    id: str
    type: str
    data: WebhookMessageData
    created_at: str
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "WebhookEvent":
        api_version = payload.get("api_version")
        return cls(
            id=payload["id"],
            type=payload["type"],
            data=WebhookMessageData.from_dict(payload["data"]),
            created_at=payload["created_at"],
            api_version=DEFAULT_API_VERSION if api_version is None else api_version,
        )


def generate_signature(payload: Payload, secret: Payload) -> str:
    """
    Generate the signature Sendly would send for a payload.

    Mostly useful for tests of webhook handlers.

    Args:
        payload: Raw request body
        secret: Webhook secret

    Returns:
        str: "sha256=" followed by the 64-character hex digest
    """
    mac = hmac.HMAC(_to_bytes(secret), hashes.SHA256())
    mac.update(_to_bytes(payload))
    return SIGNATURE_PREFIX + mac.finalize().hex()


def verify_signature(payload: Payload, signature: Optional[str], secret: Payload) -> bool:
    """Verify that a webhook payload was signed with the given secret.

    Args:
        payload: Raw request body, exactly as received
        signature: X-Sendly-Signature header value
        secret: Webhook secret from the dashboard

    Returns:
        bool: True if the signature is valid, False otherwise (never raises
        for empty inputs)
    """
    if not payload or not signature or not secret:
        return False

    expected = generate_signature(payload, secret)
    return constant_time.bytes_eq(expected.encode("utf-8"), _to_bytes(signature))


def parse_event(payload: Payload, signature: Optional[str], secret: Payload) -> WebhookEvent:
    """
    Verify and parse a webhook delivery.

    Raises:
        WebhookSignatureError: if the signature is invalid, or the payload is
            missing one of id, type, data or created_at, or data is not an object
        json.JSONDecodeError: if the payload is not UTF-8 encoded JSON
    """
    if not verify_signature(payload, signature, secret):
        raise WebhookSignatureError("Invalid webhook signature")

    raw = _to_bytes(payload)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise json.JSONDecodeError(
            f"Payload is not valid UTF-8: {e.reason}", raw.decode("utf-8", "replace"), e.start
        ) from e

    decoded = json.loads(text)

    if not isinstance(decoded, dict) or any(decoded.get(field) is None for field in REQUIRED_EVENT_FIELDS):
        raise WebhookSignatureError("Invalid event structure")
    if not isinstance(decoded["data"], dict):
        raise WebhookSignatureError("Invalid event structure")

    return WebhookEvent.from_dict(decoded)
