"""
MedStock — Identity Provider Test Doubles

Canned GoTrue payloads and a helper that builds real
``requests.Response`` objects for patched ``Session.request`` calls.

@file tests/provider.py
"""

import json

import requests

PROVIDER_USER = {
    'id': '5f0c1e2a-8d7b-4c3e-9a61-0b2f4d6e8a10',
    'email': 'nurse@clinic.test',
    'user_metadata': {'name': 'Nurse Joy', 'role': 'admin'},
    'created_at': '2024-01-15T08:30:00Z',
}


def provider_session(user=None) -> dict:
    return {
        'access_token': 'provider-access-token',
        'refresh_token': 'provider-refresh-token',
        'token_type': 'bearer',
        'expires_in': 3600,
        'user': user or PROVIDER_USER,
    }


def provider_response(status_code=200, payload=None, reason='OK') -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = 'utf-8'
    response._content = json.dumps(payload).encode() if payload is not None else b''
    return response
