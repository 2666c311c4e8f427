"""
Campaigns resource

A campaign sends one message text to every contact of its lists or segment.
Lifecycle: draft -> scheduled -> sending -> sent, with pause/resume while
sending and cancel while scheduled.
"""

from typing import Any, Dict, Iterator, Optional

from ..exceptions import ValidationError
from ..pagination import DEFAULT_BATCH_SIZE, clamp_limit, iterate_pages
from ..validation import MAX_TEXT_LENGTH, require, validate_message_type, validate_text
from .base import Resource


class Campaigns(Resource):
    STATUS_DRAFT = 'draft'
    STATUS_SCHEDULED = 'scheduled'
    STATUS_SENDING = 'sending'
    STATUS_SENT = 'sent'
    STATUS_PAUSED = 'paused'
    STATUS_CANCELLED = 'cancelled'

    def list(self, limit: Optional[int] = None, offset: int = 0,
             status: Optional[str] = None) -> Dict[str, Any]:
        params = {'limit': clamp_limit(limit), 'offset': offset, 'status': status}
        return self._client.get('/campaigns', params)

    def get(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.get(f'/campaigns/{campaign_id}')

    def create(self, name: str, text: str, **options: Any) -> Dict[str, Any]:
        """Create a draft campaign.

        Options: contactListId, contactListIds, segmentId, messageType
        """
        require(name, 'Campaign name is required')
        validate_text(text, label='Campaign')
        validate_message_type(options.get('messageType'))

        return self._client.post('/campaigns', {'name': name, 'text': text, **options})

    def update(self, campaign_id: str, **fields: Any) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')

        text = fields.get('text')
        if text is not None and len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f'Campaign text exceeds maximum length ({MAX_TEXT_LENGTH} characters)')
        validate_message_type(fields.get('messageType'))

        return self._client.patch(f'/campaigns/{campaign_id}', fields)

    def delete(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.delete(f'/campaigns/{campaign_id}')

    def preview(self, campaign_id: str) -> Dict[str, Any]:
        """Recipient count and estimated cost, without sending"""
        require(campaign_id, 'Campaign ID is required')
        return self._client.get(f'/campaigns/{campaign_id}/preview')

    def send(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.post(f'/campaigns/{campaign_id}/send')

    def schedule(self, campaign_id: str, scheduled_at: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        require(scheduled_at, 'Scheduled time is required')
        return self._client.post(f'/campaigns/{campaign_id}/schedule', {'scheduledAt': scheduled_at})

    def cancel(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.post(f'/campaigns/{campaign_id}/cancel')

    def pause(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.post(f'/campaigns/{campaign_id}/pause')

    def resume(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.post(f'/campaigns/{campaign_id}/resume')

    def clone(self, campaign_id: str, name: Optional[str] = None) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.post(f'/campaigns/{campaign_id}/clone', self._compact({'name': name}))

    def stats(self, campaign_id: str) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        return self._client.get(f'/campaigns/{campaign_id}/stats')

    def recipients(self, campaign_id: str, limit: Optional[int] = None, offset: int = 0,
                   status: Optional[str] = None) -> Dict[str, Any]:
        require(campaign_id, 'Campaign ID is required')
        params = {'limit': clamp_limit(limit), 'offset': offset, 'status': status}
        return self._client.get(f'/campaigns/{campaign_id}/recipients', params)

    def each(self, status: Optional[str] = None,
             batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[Dict[str, Any]]:
        def fetch(limit, offset):
            response = self.list(limit=limit, offset=offset, status=status)
            return self._unwrap(response, 'campaigns', 'data') or [], None

        return iterate_pages(fetch, batch_size)
