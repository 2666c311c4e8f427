"""Contact lists resource, reachable as client.contacts.lists"""

from typing import Any, Dict, Iterator, List, Optional

from ..pagination import DEFAULT_BATCH_SIZE, clamp_limit, iterate_pages
from ..validation import require
from .base import Resource


class ContactLists(Resource):

    def list(self, limit: Optional[int] = None, offset: int = 0) -> Dict[str, Any]:
        return self._client.get('/contact-lists', {'limit': clamp_limit(limit), 'offset': offset})

    def get(self, list_id: str) -> Dict[str, Any]:
        require(list_id, 'Contact list ID is required')
        return self._client.get(f'/contact-lists/{list_id}')

    def create(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        require(name, 'Contact list name is required')
        return self._client.post('/contact-lists', self._compact({'name': name, 'description': description}))

    def update(self, list_id: str, name: Optional[str] = None,
               description: Optional[str] = None) -> Dict[str, Any]:
        require(list_id, 'Contact list ID is required')
        return self._client.patch(f'/contact-lists/{list_id}',
                                  self._compact({'name': name, 'description': description}))

    def delete(self, list_id: str) -> Dict[str, Any]:
        require(list_id, 'Contact list ID is required')
        return self._client.delete(f'/contact-lists/{list_id}')

    def add_contacts(self, list_id: str, contact_ids: List[str]) -> Dict[str, Any]:
        require(list_id, 'Contact list ID is required')
        require(contact_ids, 'At least one contact ID is required')
        return self._client.post(f'/contact-lists/{list_id}/contacts', {'contact_ids': list(contact_ids)})

    def remove_contact(self, list_id: str, contact_id: str) -> Dict[str, Any]:
        require(list_id, 'Contact list ID is required')
        require(contact_id, 'Contact ID is required')
        return self._client.delete(f'/contact-lists/{list_id}/contacts/{contact_id}')

    def each(self, batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[Dict[str, Any]]:
        def fetch(limit, offset):
            response = self.list(limit=limit, offset=offset)
            return self._unwrap(response, 'lists', 'data') or [], None

        return iterate_pages(fetch, batch_size)
