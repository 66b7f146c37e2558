"""
Clients — API Tests

@file clients/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from clients.models import Client
from tests.factories import ClientFactory, DepartmentClientFactory

pytestmark = pytest.mark.django_db


class TestClientEndpoints:
    def test_create_patient_drops_department_id(self, authenticated_client):
        response = authenticated_client.post(reverse('api-v1:clients:client-list'), {
            'name': 'Mary Major',
            'client_type': 'patient',
            'patient_id': 'PAT-100',
            'department_id': 'SHOULD-GO',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        client = Client.objects.get(pk=response.json()['data']['id'])
        assert client.department_id == ''

    def test_filter_by_type(self, authenticated_client):
        ClientFactory()
        DepartmentClientFactory()
        response = authenticated_client.get(
            reverse('api-v1:clients:client-list'), {'client_type': 'department'},
        )
        data = response.json()['data']
        assert len(data) == 1
        assert data[0]['client_type_display'] == 'Department'

    def test_update_and_delete(self, authenticated_client):
        client = ClientFactory()
        url = reverse('api-v1:clients:client-detail', kwargs={'pk': client.pk})

        response = authenticated_client.patch(url, {'contact_number': '+15550000001'}, format='json')
        assert response.status_code == status.HTTP_200_OK

        response = authenticated_client.delete(url)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert authenticated_client.get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_invalid_type(self, authenticated_client):
        response = authenticated_client.post(reverse('api-v1:clients:client-list'), {
            'name': 'Nobody', 'client_type': 'visitor',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
