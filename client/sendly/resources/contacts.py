"""Contacts resource"""

from typing import Any, Dict, Iterator, Optional

from ..pagination import DEFAULT_BATCH_SIZE, clamp_limit, iterate_pages
from ..validation import require
from .base import Resource
from .contact_lists import ContactLists


class Contacts(Resource):

    def __init__(self, client):
        super().__init__(client)
        self.lists = ContactLists(client)

    def list(self, limit: Optional[int] = None, offset: int = 0, search: Optional[str] = None,
             list_id: Optional[str] = None) -> Dict[str, Any]:
        params = {
            'limit': clamp_limit(limit),
            'offset': offset,
            'search': search,
            'list_id': list_id,
        }
        return self._client.get('/contacts', params)

    def get(self, contact_id: str) -> Dict[str, Any]:
        require(contact_id, 'Contact ID is required')
        return self._client.get(f'/contacts/{contact_id}')

    def create(self, phone_number: str, name: Optional[str] = None, email: Optional[str] = None,
               metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        require(phone_number, 'Phone number is required')

        data = self._compact({
            'phone_number': phone_number,
            'name': name,
            'email': email,
            'metadata': metadata,
        })
        return self._client.post('/contacts', data)

    def update(self, contact_id: str, phone_number: Optional[str] = None, name: Optional[str] = None,
               email: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        require(contact_id, 'Contact ID is required')

        body = self._compact({
            'phone_number': phone_number,
            'name': name,
            'email': email,
            'metadata': metadata,
        })
        return self._client.patch(f'/contacts/{contact_id}', body)

    def delete(self, contact_id: str) -> Dict[str, Any]:
        require(contact_id, 'Contact ID is required')
        return self._client.delete(f'/contacts/{contact_id}')

    def each(self, search: Optional[str] = None, list_id: Optional[str] = None,
             batch_size: int = DEFAULT_BATCH_SIZE) -> Iterator[Dict[str, Any]]:
        def fetch(limit, offset):
            response = self.list(limit=limit, offset=offset, search=search, list_id=list_id)
            return self._unwrap(response, 'contacts', 'data') or [], None

        return iterate_pages(fetch, batch_size)
