"""
Assignments — API Tests

@file assignments/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from tests.factories import ClientFactory, ProductFactory

pytestmark = pytest.mark.django_db

LIST_URL = 'api-v1:assignments:assignment-list'


class TestAssignmentEndpoints:
    def test_create(self, authenticated_client, user):
        product = ProductFactory(quantity=9)
        client = ClientFactory()
        response = authenticated_client.post(reverse(LIST_URL), {
            'product': str(product.pk), 'client': str(client.pk), 'quantity': 9,
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['assigned_by'] == str(user.pk)
        product.refresh_from_db()
        assert product.quantity == 0

    def test_quantity_above_stock(self, authenticated_client):
        product = ProductFactory(quantity=2, unit='vial')
        response = authenticated_client.post(reverse(LIST_URL), {
            'product': str(product.pk), 'client': str(ClientFactory().pk), 'quantity': 3,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantity' in response.json()['errors']
        product.refresh_from_db()
        assert product.quantity == 2

    def test_deleted_product_rejected(self, authenticated_client):
        product = ProductFactory(is_deleted=True)
        response = authenticated_client.post(reverse(LIST_URL), {
            'product': str(product.pk), 'client': str(ClientFactory().pk), 'quantity': 1,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_no_update_route(self, authenticated_client):
        product = ProductFactory()
        created = authenticated_client.post(reverse(LIST_URL), {
            'product': str(product.pk), 'client': str(ClientFactory().pk), 'quantity': 1,
        }, format='json').json()['data']
        url = reverse('api-v1:assignments:assignment-detail', kwargs={'pk': created['id']})
        response = authenticated_client.patch(url, {'quantity': 5}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_delete_keeps_stock(self, authenticated_client):
        product = ProductFactory(quantity=5)
        created = authenticated_client.post(reverse(LIST_URL), {
            'product': str(product.pk), 'client': str(ClientFactory().pk), 'quantity': 2,
        }, format='json').json()['data']

        url = reverse('api-v1:assignments:assignment-detail', kwargs={'pk': created['id']})
        assert authenticated_client.delete(url).status_code == status.HTTP_204_NO_CONTENT

        product.refresh_from_db()
        assert product.quantity == 3
        assert authenticated_client.get(reverse(LIST_URL)).json()['meta']['count'] == 0
