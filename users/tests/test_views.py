"""
Users — API Integration Tests

End-to-end tests for auth endpoints and user CRUD.

@file users/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from tests.factories import UserFactory
from tests.provider import PROVIDER_USER, provider_response, provider_session
from users.models import User


@pytest.mark.django_db
class TestLoginEndpoint:
    def test_login_success(self, api_client, identity_provider):
        identity_provider.return_value = provider_response(200, provider_session())
        response = api_client.post(
            reverse('api-v1:auth:login'),
            {'email': 'nurse@clinic.test', 'password': 'Login2026!!'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['success'] is True
        assert 'access' in data['data']
        assert 'refresh' in data['data']
        assert data['data']['user']['email'] == 'nurse@clinic.test'
        assert data['data']['session']['refresh_token'] == 'provider-refresh-token'

    def test_login_with_self_declared_superadmin_gets_no_user_management(self, api_client, identity_provider):
        provider_user = {**PROVIDER_USER, 'user_metadata': {'name': 'Eve', 'role': 'superadmin'}}
        identity_provider.return_value = provider_response(200, provider_session(provider_user))
        response = api_client.post(
            reverse('api-v1:auth:login'),
            {'email': 'nurse@clinic.test', 'password': 'Login2026!!'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert User.objects.get(email='nurse@clinic.test').role == User.RoleChoices.AUTHENTICATED

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.json()['data']['access']}")
        response = api_client.get(reverse('api-v1:users:user-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_login_wrong_password_shows_provider_message(self, api_client, identity_provider):
        identity_provider.return_value = provider_response(
            400, {'error': 'invalid_grant', 'error_description': 'Invalid login credentials'},
            reason='Bad Request',
        )
        response = api_client.post(
            reverse('api-v1:auth:login'),
            {'email': 'nurse@clinic.test', 'password': 'wrong'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'IDENTITY_PROVIDER_ERROR'
        assert body['errors']['detail'] == 'Invalid login credentials'

    def test_login_requires_email(self, api_client, identity_provider):
        response = api_client.post(reverse('api-v1:auth:login'), {'password': 'x'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        identity_provider.assert_not_called()


@pytest.mark.django_db
class TestSignupAndSession:
    def test_signup(self, api_client, identity_provider):
        identity_provider.return_value = provider_response(200, PROVIDER_USER)
        response = api_client.post(
            reverse('api-v1:auth:signup'),
            {'email': 'nurse@clinic.test', 'password': 'secret12'},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()['data']['message'] == 'Check your email for confirmation!'

    def test_signup_duplicate_message(self, api_client, identity_provider):
        identity_provider.return_value = provider_response(
            422, {'code': 422, 'msg': 'User already registered'}, reason='Unprocessable Entity',
        )
        response = api_client.post(
            reverse('api-v1:auth:signup'),
            {'email': 'nurse@clinic.test', 'password': 'secret12'},
            format='json',
        )
        assert response.status_code == 422
        assert response.json()['errors']['detail'] == 'User already registered'

    def test_session_restore(self, api_client, identity_provider):
        identity_provider.return_value = provider_response(200, PROVIDER_USER)
        response = api_client.post(
            reverse('api-v1:auth:session'),
            {'access_token': 'provider-access-token'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['user']['name'] == 'Nurse Joy'


@pytest.mark.django_db
class TestLogoutAndMe:
    def test_logout(self, authenticated_client, identity_provider):
        identity_provider.return_value = provider_response(204, None)
        response = authenticated_client.post(
            reverse('api-v1:auth:logout'),
            {'provider_access_token': 'provider-access-token'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert identity_provider.call_count == 1

    def test_me_authenticated(self, authenticated_client, user):
        response = authenticated_client.get(reverse('api-v1:auth:me'))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['email'] == user.email

    def test_me_unauthenticated(self, api_client):
        response = api_client.get(reverse('api-v1:auth:me'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestUserCRUD:
    def test_list_users(self, admin_client):
        UserFactory.create_batch(3)
        response = admin_client.get(reverse('api-v1:users:user-list'))
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['meta']['count'] == 4

    def test_create_user(self, admin_client):
        response = admin_client.post(
            reverse('api-v1:users:user-list'),
            {
                'email': 'new.admin@clinic.test',
                'name': 'New Admin',
                'role': 'admin',
                'password': 'NewUser2026!!',
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert User.objects.get(email='new.admin@clinic.test').role == 'admin'

    def test_update_user_role(self, admin_client):
        target = UserFactory()
        response = admin_client.patch(
            reverse('api-v1:users:user-detail', kwargs={'pk': target.pk}),
            {'role': 'superadmin'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['role'] == 'superadmin'

    def test_delete_user(self, admin_client):
        target = UserFactory()
        response = admin_client.delete(reverse('api-v1:users:user-detail', kwargs={'pk': target.pk}))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        target.refresh_from_db()
        assert target.is_deleted

    def test_admin_role_cannot_manage_users(self, authenticated_client):
        response = authenticated_client.get(reverse('api-v1:users:user-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_unauthenticated_access_denied(self, api_client):
        response = api_client.get(reverse('api-v1:users:user-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
