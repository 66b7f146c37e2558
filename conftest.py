"""
MedStock — Root conftest for pytest

Shared fixtures available to all test modules.

@file conftest.py
"""

from unittest import mock

import pytest
from rest_framework.test import APIClient

from tests.factories import SuperuserFactory, UserFactory


@pytest.fixture
def api_client():
    """Unauthenticated DRF test client."""
    return APIClient()


@pytest.fixture
def user(db):
    """Active admin-role user with default password TestPass2026!"""
    return UserFactory()


@pytest.fixture
def admin_user(db):
    """Superadmin (and Django superuser) with default password TestPass2026!"""
    return SuperuserFactory()


@pytest.fixture
def authenticated_client(api_client, user):
    """API client authenticated as a regular user."""
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def admin_client(api_client, admin_user):
    """API client authenticated as a superadmin."""
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def identity_provider():
    """Patches every outgoing provider HTTP call; set ``return_value`` / ``side_effect``."""
    with mock.patch('requests.Session.request') as request:
        yield request
