"""
Webhooks resource: manages webhook endpoints registered with Sendly

Verifying deliveries made to those endpoints is handled by sendly.webhooks.
"""

from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from ..exceptions import ValidationError
from ..validation import require
from .base import Resource


class Webhooks(Resource):

    def list(self) -> Dict[str, Any]:
        return self._client.get('/webhooks')

    def get(self, webhook_id: str) -> Dict[str, Any]:
        require(webhook_id, 'Webhook ID is required')
        return self._client.get(f'/webhooks/{webhook_id}')

    def create(self, url: str, events: Optional[List[str]] = None,
               description: Optional[str] = None) -> Dict[str, Any]:
        """Register an endpoint. The response carries the signing secret."""
        self._validate_url(url)
        return self._client.post('/webhooks', self._compact({
            'url': url,
            'events': events,
            'description': description,
        }))

    def update(self, webhook_id: str, **fields: Any) -> Dict[str, Any]:
        require(webhook_id, 'Webhook ID is required')
        if 'url' in fields:
            self._validate_url(fields['url'])
        return self._client.patch(f'/webhooks/{webhook_id}', fields)

    def delete(self, webhook_id: str) -> Dict[str, Any]:
        require(webhook_id, 'Webhook ID is required')
        return self._client.delete(f'/webhooks/{webhook_id}')

    def test(self, webhook_id: str) -> Dict[str, Any]:
        """Ask Sendly to send a test event to the endpoint"""
        require(webhook_id, 'Webhook ID is required')
        return self._client.post(f'/webhooks/{webhook_id}/test')

    def rotate_secret(self, webhook_id: str) -> Dict[str, Any]:
        require(webhook_id, 'Webhook ID is required')
        return self._client.post(f'/webhooks/{webhook_id}/rotate-secret')

    @staticmethod
    def _validate_url(url: str) -> None:
        require(url, 'Webhook URL is required')
        parsed = urlparse(url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValidationError(f"Invalid webhook URL: '{url}'. Must be an http(s) URL")
