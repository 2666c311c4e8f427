"""Account resource: account details, credits and API keys"""

from typing import List, Optional, Tuple

from ..models import Account as AccountModel
from ..models import ApiKey, CreditTransaction, Credits
from ..pagination import clamp_limit
from ..validation import require
from .base import Resource


class Account(Resource):

    def get(self) -> AccountModel:
        response = self._client.get('/account')
        return AccountModel.from_dict(self._unwrap(response, 'account', 'data'))

    def credits(self) -> Credits:
        response = self._client.get('/account/credits')
        return Credits.from_dict(self._unwrap(response, 'credits', 'data'))

    def transactions(self, limit: Optional[int] = None, offset: int = 0,
                     type: Optional[str] = None) -> List[CreditTransaction]:
        params = {'limit': clamp_limit(limit), 'offset': offset, 'type': type}
        response = self._client.get('/account/transactions', params)
        transactions = self._unwrap(response, 'transactions', 'data')

        if not isinstance(transactions, list):
            return []
        return [CreditTransaction.from_dict(item) for item in transactions]

    def api_keys(self) -> List[ApiKey]:
        response = self._client.get('/account/api-keys')
        keys = self._unwrap(response, 'api_keys', 'apiKeys', 'data')

        if not isinstance(keys, list):
            return []
        return [ApiKey.from_dict(item) for item in keys]

    def create_api_key(self, name: str, expires_at: Optional[str] = None) -> Tuple[ApiKey, str]:
        """Create an API key.

        Returns:
            (api_key, key): the key's metadata and the full secret key value,
            which the API only returns once
        """
        require(name, 'API key name is required')

        payload = self._compact({'name': name, 'expires_at': expires_at})
        response = self._client.post('/account/api-keys', payload)

        api_key = ApiKey.from_dict(self._unwrap(response, 'api_key', 'apiKey'))
        return api_key, response.get('key', '')

    def revoke_api_key(self, key_id: str) -> bool:
        require(key_id, 'API key ID is required')

        self._client.delete(f'/account/api-keys/{key_id}')
        return True
