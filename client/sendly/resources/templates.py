"""Templates resource: message templates used by Verify"""

from typing import Any, Dict, Optional

from ..validation import require
from .base import Resource


class Templates(Resource):

    def list(self, limit: Optional[int] = None, type: Optional[str] = None,
             locale: Optional[str] = None) -> Dict[str, Any]:
        return self._client.get('/verify/templates', {'limit': limit, 'type': type, 'locale': locale})

    def get(self, template_id: str) -> Dict[str, Any]:
        require(template_id, 'Template ID is required')
        return self._client.get(f'/verify/templates/{template_id}')

    def create(self, name: str, body: str, **options: Any) -> Dict[str, Any]:
        """Create a template. The body may use the {{code}} and {{appName}} variables."""
        require(name, 'Template name is required')
        require(body, 'Template body is required')
        return self._client.post('/verify/templates', {'name': name, 'body': body, **options})

    def update(self, template_id: str, **fields: Any) -> Dict[str, Any]:
        require(template_id, 'Template ID is required')
        return self._client.patch(f'/verify/templates/{template_id}', fields)

    def delete(self, template_id: str) -> Dict[str, Any]:
        require(template_id, 'Template ID is required')
        return self._client.delete(f'/verify/templates/{template_id}')

    def publish(self, template_id: str) -> Dict[str, Any]:
        require(template_id, 'Template ID is required')
        return self._client.post(f'/verify/templates/{template_id}/publish')

    def unpublish(self, template_id: str) -> Dict[str, Any]:
        require(template_id, 'Template ID is required')
        return self._client.post(f'/verify/templates/{template_id}/unpublish')
