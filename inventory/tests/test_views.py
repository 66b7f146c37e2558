"""
Inventory — API Tests

@file inventory/tests/test_views.py
"""

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from inventory.models import Product
from tests.factories import ProductFactory

pytestmark = pytest.mark.django_db

LIST_URL = 'api-v1:inventory:product-list'


def _url(name, **kwargs):
    return reverse(f'api-v1:inventory:{name}', kwargs=kwargs or None)


class TestProductCrud:
    def test_requires_auth(self, api_client):
        assert api_client.get(reverse(LIST_URL)).status_code == status.HTTP_401_UNAUTHORIZED

    def test_create(self, authenticated_client):
        response = authenticated_client.post(reverse(LIST_URL), {
            'name': 'Insulin Glargine',
            'category': 'Endocrine',
            'quantity': 12,
            'unit': 'vial',
            'expiry_date': (timezone.now().date() + timedelta(days=200)).isoformat(),
            'reorder_level': 4,
            'cost_per_unit': '18.50',
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert Product.objects.get(pk=data['id']).name == 'Insulin Glargine'

    def test_create_validates_quantity(self, authenticated_client):
        response = authenticated_client.post(reverse(LIST_URL), {
            'name': 'X', 'category': 'Y', 'quantity': -1, 'unit': 'box',
            'expiry_date': '2030-01-01', 'cost_per_unit': '1.00',
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'quantity' in response.json()['errors']

    def test_search_and_filter(self, authenticated_client):
        ProductFactory(name='Ibuprofen', category='Analgesics')
        ProductFactory(name='Cefazolin', category='Antibiotics')
        response = authenticated_client.get(reverse(LIST_URL), {'search': 'ibu'})
        assert [p['name'] for p in response.json()['data']] == ['Ibuprofen']
        response = authenticated_client.get(reverse(LIST_URL), {'category': 'Antibiotics'})
        assert [p['name'] for p in response.json()['data']] == ['Cefazolin']

    def test_update(self, authenticated_client):
        product = ProductFactory()
        response = authenticated_client.patch(
            _url('product-detail', pk=product.pk), {'reorder_level': 50}, format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        product.refresh_from_db()
        assert product.reorder_level == 50

    def test_delete(self, authenticated_client):
        product = ProductFactory()
        response = authenticated_client.delete(_url('product-detail', pk=product.pk))
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert authenticated_client.get(reverse(LIST_URL)).json()['meta']['count'] == 0


class TestProductActions:
    def test_add_stock(self, authenticated_client):
        product = ProductFactory(quantity=3)
        response = authenticated_client.post(
            _url('product-add-stock', pk=product.pk), {'quantity': 7}, format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['quantity'] == 10

    def test_add_stock_rejects_zero(self, authenticated_client):
        product = ProductFactory()
        response = authenticated_client.post(
            _url('product-add-stock', pk=product.pk), {'quantity': 0}, format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_low_stock(self, authenticated_client):
        ProductFactory(quantity=1, reorder_level=2)
        ProductFactory(quantity=100)
        response = authenticated_client.get(_url('product-low-stock'))
        assert response.json()['meta']['count'] == 1

    def test_expiring(self, authenticated_client):
        ProductFactory(expiry_date=timezone.now().date() + timedelta(days=15))
        ProductFactory(expiry_date=timezone.now().date() + timedelta(days=60))
        assert authenticated_client.get(_url('product-expiring')).json()['meta']['count'] == 2
        response = authenticated_client.get(_url('product-expiring'), {'days': 30})
        assert response.json()['meta']['count'] == 1

    def test_expiring_rejects_bad_days(self, authenticated_client):
        response = authenticated_client.get(_url('product-expiring'), {'days': 'soon'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_categories(self, authenticated_client):
        ProductFactory(category='Vaccines')
        response = authenticated_client.get(_url('product-categories'))
        assert response.json()['data'] == ['Vaccines']
