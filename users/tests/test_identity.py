"""
Users — Identity Provider Client Tests

Provider HTTP is faked at the ``requests.Session.request`` boundary.

@file users/tests/test_identity.py
"""

from unittest import mock

import pytest
import requests

from core.exceptions import IdentityProviderError
from tests.provider import PROVIDER_USER, provider_response, provider_session
from users.identity import IdentityProviderClient, map_provider_user


class TestMapProviderUser:
    def test_maps_metadata(self):
        mapped = map_provider_user(PROVIDER_USER)
        assert mapped == {
            'id': PROVIDER_USER['id'],
            'name': 'Nurse Joy',
            'email': 'nurse@clinic.test',
            'role': 'admin',
            'created_at': '2024-01-15T08:30:00Z',
            'app_role': '',
        }

    def test_app_metadata_role_mapped_separately(self):
        mapped = map_provider_user({**PROVIDER_USER, 'app_metadata': {'provider': 'email', 'role': 'superadmin'}})
        assert mapped['role'] == 'admin'
        assert mapped['app_role'] == 'superadmin'

    def test_defaults_role_and_created_at(self):
        mapped = map_provider_user({'id': 'abc', 'email': 'x@clinic.test'})
        assert mapped['role'] == 'authenticated'
        assert mapped['name'] == ''
        assert mapped['created_at']


class TestIdentityProviderClient:
    def test_sign_in_uses_password_grant(self, identity_provider):
        identity_provider.return_value = provider_response(200, provider_session())

        session = IdentityProviderClient().sign_in('nurse@clinic.test', 'pw')

        assert session['access_token'] == 'provider-access-token'
        method, url = identity_provider.call_args.args
        assert method == 'POST'
        assert url == 'http://identity.test/auth/v1/token'
        kwargs = identity_provider.call_args.kwargs
        assert kwargs['params'] == {'grant_type': 'password'}
        assert kwargs['json'] == {'email': 'nurse@clinic.test', 'password': 'pw'}
        assert kwargs['headers']['apikey'] == 'test-anon-key'

    def test_get_user_sends_bearer_token(self, identity_provider):
        identity_provider.return_value = provider_response(200, PROVIDER_USER)

        IdentityProviderClient().get_user('user-token')

        method, url = identity_provider.call_args.args
        assert (method, url) == ('GET', 'http://identity.test/auth/v1/user')
        assert identity_provider.call_args.kwargs['headers']['Authorization'] == 'Bearer user-token'

    def test_refresh_uses_refresh_grant(self, identity_provider):
        identity_provider.return_value = provider_response(200, provider_session())

        IdentityProviderClient().refresh('old-refresh')

        kwargs = identity_provider.call_args.kwargs
        assert kwargs['params'] == {'grant_type': 'refresh_token'}
        assert kwargs['json'] == {'refresh_token': 'old-refresh'}

    def test_sign_out_accepts_empty_body(self, identity_provider):
        identity_provider.return_value = provider_response(204, None, reason='No Content')
        assert IdentityProviderClient().sign_out('user-token') is None

    @pytest.mark.parametrize('body, message', [
        ({'error': 'invalid_grant', 'error_description': 'Invalid login credentials'}, 'Invalid login credentials'),
        ({'code': 422, 'msg': 'User already registered'}, 'User already registered'),
        ({'message': 'Email rate limit exceeded'}, 'Email rate limit exceeded'),
    ])
    def test_error_message_passed_through(self, identity_provider, body, message):
        identity_provider.return_value = provider_response(400, body, reason='Bad Request')

        with pytest.raises(IdentityProviderError) as excinfo:
            IdentityProviderClient().sign_in('nurse@clinic.test', 'wrong')

        assert str(excinfo.value.detail) == message
        assert excinfo.value.status_code == 400

    def test_server_error_maps_to_bad_gateway(self, identity_provider):
        identity_provider.return_value = provider_response(500, {'message': 'boom'}, reason='Server Error')

        with pytest.raises(IdentityProviderError) as excinfo:
            IdentityProviderClient().get_user('token')

        assert excinfo.value.status_code == 502

    def test_network_failure_is_not_retried(self, identity_provider):
        identity_provider.side_effect = requests.ConnectionError('connection refused')

        with pytest.raises(IdentityProviderError) as excinfo:
            IdentityProviderClient().sign_in('nurse@clinic.test', 'pw')

        assert excinfo.value.status_code == 503
        assert identity_provider.call_count == 1

    def test_explicit_session_is_used(self):
        session = mock.Mock()
        session.request.return_value = provider_response(200, PROVIDER_USER)

        client = IdentityProviderClient(base_url='https://auth.example/', api_key='k', session=session)
        client.get_user('t')

        assert session.request.call_args.args[1] == 'https://auth.example/auth/v1/user'
