"""Local input checks run before any request leaves the client"""

import re
from typing import Any, Iterable, Mapping, Optional

from .exceptions import ValidationError

# E.164: leading +, country code digit 1-9, at most 15 digits in total
PHONE_PATTERN = re.compile(r'\+[1-9][0-9]{1,14}')
MAX_TEXT_LENGTH = 1600
MESSAGE_TYPES = ('marketing', 'transactional')


def require(value: Any, message: str) -> None:
    if not value:
        raise ValidationError(message)


def validate_phone(phone: str) -> None:
    if not isinstance(phone, str) or not PHONE_PATTERN.fullmatch(phone):
        raise ValidationError(
            'Invalid phone number format. Use E.164 format (e.g., +15551234567)'
        )


def validate_text(text: str, label: str = 'Message') -> None:
    if not text:
        raise ValidationError(f'{label} text is required')

    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError(
            f'{label} text exceeds maximum length ({MAX_TEXT_LENGTH} characters)'
        )


def validate_message_type(message_type: Optional[str]) -> None:
    if message_type is not None and message_type not in MESSAGE_TYPES:
        raise ValidationError(
            f"Invalid message type: '{message_type}'. Must be 'marketing' or 'transactional'"
        )


def validate_batch(messages: Iterable[Mapping[str, Any]]) -> None:
    """Check every item of a batch carries a valid recipient and text"""
    if not messages:
        raise ValidationError('Messages array cannot be empty')

    for index, message in enumerate(messages):
        if (not isinstance(message, Mapping)
                or message.get('to') is None or message.get('text') is None):
            raise ValidationError(f"Message at index {index} must have 'to' and 'text' fields")
        validate_phone(message['to'])
        validate_text(message['text'])
