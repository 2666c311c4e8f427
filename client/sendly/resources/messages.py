"""
Messages resource

Send, schedule and batch SMS/MMS messages, and look up their delivery status.
All parameters are validated locally before any request is made.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from ..models import Message, MessageList
from ..pagination import DEFAULT_BATCH_SIZE, clamp_limit, iterate_pages
from ..validation import (
    require,
    validate_batch,
    validate_message_type,
    validate_phone,
    validate_text,
)
from .base import Resource

logger = logging.getLogger(__name__)


class Messages(Resource):

    def send(self, to: str, text: str, message_type: Optional[str] = None,
             metadata: Optional[Dict[str, Any]] = None,
             media_urls: Optional[List[str]] = None) -> Message:
        """Send an SMS, or an MMS when media_urls are given.

        Args:
            to: Recipient phone number in E.164 format
            text: Message content (max 1600 characters)
            message_type: 'marketing' (default, subject to quiet hours) or
                'transactional' (24/7)
            metadata: Custom JSON metadata to attach (max 4KB)
            media_urls: Media URLs to attach

        Returns:
            Message: The sent message
        """
        validate_phone(to)
        validate_text(text)
        validate_message_type(message_type)

        payload = self._compact({
            'to': to,
            'text': text,
            'messageType': message_type,
            'metadata': metadata,
            'mediaUrls': media_urls,
        })

        response = self._client.post('/messages', payload)
        message = Message.from_dict(self._unwrap(response, 'message', 'data'))
        logger.info(f"Message {message.id} queued to {to} - status: {message.status}")
        return message

    def list(self, limit: Optional[int] = None, offset: int = 0, status: Optional[str] = None,
             to: Optional[str] = None) -> MessageList:
        params = {
            'limit': clamp_limit(limit),
            'offset': offset,
            'status': status,
            'to': to,
        }
        return MessageList.from_dict(self._client.get('/messages', params))

    def get(self, message_id: str) -> Message:
        require(message_id, 'Message ID is required')

        response = self._client.get(f'/messages/{message_id}')
        return Message.from_dict(self._unwrap(response, 'data', 'message'))

    def each(self, status: Optional[str] = None, to: Optional[str] = None,
             batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[Message]:
        """Iterate over all messages, fetching pages of batch_size as needed"""
        def fetch(limit, offset):
            page = self.list(limit=limit, offset=offset, status=status, to=to)
            return page.messages, page.has_more

        return iterate_pages(fetch, batch_size)

    def schedule(self, to: str, text: str, scheduled_at: str, from_: Optional[str] = None,
                 message_type: Optional[str] = None,
                 metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Schedule a message for future delivery.

        Args:
            scheduled_at: ISO 8601 datetime for when to send
            from_: Sender ID or phone number
        """
        validate_phone(to)
        validate_text(text)
        validate_message_type(message_type)
        require(scheduled_at, 'Scheduled time is required')

        payload = self._compact({
            'to': to,
            'text': text,
            'scheduledAt': scheduled_at,
            'from': from_,
            'messageType': message_type,
            'metadata': metadata,
        })

        return self._client.post('/messages/schedule', payload)

    def list_scheduled(self, limit: Optional[int] = None, offset: int = 0,
                       status: Optional[str] = None) -> Dict[str, Any]:
        params = {'limit': clamp_limit(limit), 'offset': offset, 'status': status}
        return self._client.get('/messages/scheduled', params)

    def get_scheduled(self, scheduled_id: str) -> Dict[str, Any]:
        require(scheduled_id, 'Scheduled message ID is required')
        return self._client.get(f'/messages/scheduled/{scheduled_id}')

    def cancel_scheduled(self, scheduled_id: str) -> Dict[str, Any]:
        """Cancel a scheduled message. The result includes refund details."""
        require(scheduled_id, 'Scheduled message ID is required')
        return self._client.delete(f'/messages/scheduled/{scheduled_id}')

    def send_batch(self, messages: Sequence[Mapping[str, Any]], from_: Optional[str] = None,
                   message_type: Optional[str] = None,
                   metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Send many messages in one request.

        Args:
            messages: Items with 'to' and 'text' keys
            from_: Sender ID or phone number, applies to all messages
        """
        validate_message_type(message_type)
        validate_batch(messages)

        payload = self._compact({
            'messages': [dict(message) for message in messages],
            'from': from_,
            'messageType': message_type,
            'metadata': metadata,
        })

        response = self._client.post('/messages/batch', payload)
        logger.info(f"Batch of {len(messages)} messages submitted")
        return response

    def get_batch(self, batch_id: str) -> Dict[str, Any]:
        require(batch_id, 'Batch ID is required')
        return self._client.get(f'/messages/batch/{batch_id}')

    def list_batches(self, limit: Optional[int] = None, offset: int = 0,
                     status: Optional[str] = None) -> Dict[str, Any]:
        params = {'limit': clamp_limit(limit), 'offset': offset, 'status': status}
        return self._client.get('/messages/batches', params)

    def preview_batch(self, messages: Sequence[Mapping[str, Any]], from_: Optional[str] = None,
                      message_type: Optional[str] = None) -> Dict[str, Any]:
        """Dry run of send_batch: reports what would happen without sending"""
        validate_message_type(message_type)
        validate_batch(messages)

        payload = self._compact({
            'messages': [dict(message) for message in messages],
            'from': from_,
            'messageType': message_type,
        })

        return self._client.post('/messages/batch/preview', payload)
