"""Verify resource: one-time passcodes sent by SMS, and hosted verification sessions"""

from typing import Any, Dict, Optional

from ..validation import require, validate_phone
from .base import Resource


class Sessions(Resource):

    def create(self, success_url: str, **options: Any) -> Dict[str, Any]:
        """Create a hosted verification session.

        Options: cancel_url, brand_name, brand_color, metadata
        """
        require(success_url, 'Success URL is required')
        return self._client.post('/verify/sessions', {'success_url': success_url, **options})

    def validate(self, token: str) -> Dict[str, Any]:
        """Validate the one-time token handed back after the user completes verification"""
        require(token, 'Session token is required')
        return self._client.post('/verify/sessions/validate', {'token': token})


class Verify(Resource):

    def __init__(self, client):
        super().__init__(client)
        self.sessions = Sessions(client)

    def send(self, phone: str, **options: Any) -> Dict[str, Any]:
        """Send a verification code.

        Options: channel, codeLength, expiresIn, maxAttempts, templateId,
        profileId, appName, locale, metadata
        """
        validate_phone(phone)
        return self._client.post('/verify', {'phone': phone, **options})

    def resend(self, verification_id: str) -> Dict[str, Any]:
        require(verification_id, 'Verification ID is required')
        return self._client.post(f'/verify/{verification_id}/resend')

    def check(self, verification_id: str, code: str) -> Dict[str, Any]:
        require(verification_id, 'Verification ID is required')
        require(code, 'Verification code is required')
        return self._client.post(f'/verify/{verification_id}/check', {'code': code})

    def get(self, verification_id: str) -> Dict[str, Any]:
        require(verification_id, 'Verification ID is required')
        return self._client.get(f'/verify/{verification_id}')

    def list(self, limit: Optional[int] = None, status: Optional[str] = None,
             phone: Optional[str] = None) -> Dict[str, Any]:
        return self._client.get('/verify', {'limit': limit, 'status': status, 'phone': phone})
