"""
Users — Identity Provider Client

Thin client for the GoTrue-compatible auth REST API of the hosted
backend. Every call is a single HTTP request; failures are raised as
IdentityProviderError carrying the provider's own message, with no retry.

@file users/identity.py
"""

import logging
from typing import Any

import requests
from django.conf import settings
from django.utils import timezone

from core.exceptions import IdentityProviderError

logger = logging.getLogger('medstock')


def _error_message(response) -> str:
    """Pull the human-readable message out of a provider error body."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason or 'Identity provider request failed.'
    if not isinstance(payload, dict):
        return str(payload)
    for key in ('error_description', 'msg', 'message', 'error'):
        if payload.get(key):
            return str(payload[key])
    return response.reason or 'Identity provider request failed.'


def map_provider_user(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Map a provider user object to the local user shape.

    ``name`` and ``role`` come from ``user_metadata``; a missing role
    defaults to the configured default (``authenticated``) and a missing
    ``created_at`` to now. ``user_metadata`` is writable by the account
    holder, so the role that may grant access is carried separately as
    ``app_role``, read from the server-managed ``app_metadata``.
    """
    metadata = payload.get('user_metadata') or {}
    app_metadata = payload.get('app_metadata') or {}
    return {
        'id': payload.get('id'),
        'name': metadata.get('name') or '',
        'email': payload.get('email') or '',
        'role': metadata.get('role') or settings.IDENTITY_PROVIDER['DEFAULT_ROLE'],
        'created_at': payload.get('created_at') or timezone.now().isoformat(),
        'app_role': app_metadata.get('role') or '',
    }


class IdentityProviderClient:
    """REST calls against ``{URL}/auth/v1/``."""

    def __init__(self, base_url=None, api_key=None, timeout=None, session=None):
        conf = settings.IDENTITY_PROVIDER
        self.base_url = (base_url or conf['URL']).rstrip('/')
        self.api_key = api_key if api_key is not None else conf['API_KEY']
        self.timeout = timeout or conf['TIMEOUT']
        self.session = session or requests.Session()

    def _headers(self, access_token=None) -> dict[str, str]:
        return {
            'apikey': self.api_key,
            'Authorization': f'Bearer {access_token or self.api_key}',
            'Content-Type': 'application/json',
        }

    def _request(self, method, path, *, params=None, json=None, access_token=None):
        url = f'{self.base_url}/auth/v1/{path}'
        try:
            response = self.session.request(
                method, url,
                params=params,
                json=json,
                headers=self._headers(access_token),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning('Identity provider unreachable (%s %s): %s', method, path, exc)
            raise IdentityProviderError(detail=str(exc), status_code=503)

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                'Identity provider rejected %s %s [%s]: %s',
                method, path, response.status_code, message,
            )
            status_code = response.status_code if response.status_code < 500 else 502
            raise IdentityProviderError(detail=message, status_code=status_code)

        if not response.content:
            return {}
        return response.json()

    # --- Auth operations ---

    def sign_in(self, email: str, password: str) -> dict:
        """Password grant. Returns the provider session (tokens + user)."""
        return self._request(
            'POST', 'token',
            params={'grant_type': 'password'},
            json={'email': email, 'password': password},
        )

    def sign_up(self, email: str, password: str, metadata: dict | None = None) -> dict:
        """
        Register a new account. Depending on the project's confirmation
        setting the provider answers with a full session or with the bare
        (unconfirmed) user object.
        """
        return self._request(
            'POST', 'signup',
            json={'email': email, 'password': password, 'data': metadata or {}},
        )

    def get_user(self, access_token: str) -> dict:
        return self._request('GET', 'user', access_token=access_token)

    def sign_out(self, access_token: str) -> None:
        self._request('POST', 'logout', access_token=access_token)

    def refresh(self, refresh_token: str) -> dict:
        return self._request(
            'POST', 'token',
            params={'grant_type': 'refresh_token'},
            json={'refresh_token': refresh_token},
        )
