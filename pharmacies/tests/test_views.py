"""
Pharmacies — API Tests

@file pharmacies/tests/test_views.py
"""

import pytest
from django.urls import reverse
from rest_framework import status

from tests.factories import PharmacyFactory

pytestmark = pytest.mark.django_db


class TestPharmacyEndpoints:
    def test_create(self, authenticated_client):
        response = authenticated_client.post(reverse('api-v1:pharmacies:pharmacy-list'), {
            'name': 'Riverside Pharmacy',
            'registration_number': 'REG-RIV',
            'credit_limit': '2500.00',
            'payment_terms': 45,
        }, format='json')
        assert response.status_code == status.HTTP_201_CREATED

    def test_duplicate_registration_number(self, authenticated_client):
        PharmacyFactory(registration_number='REG-TAKEN')
        response = authenticated_client.post(reverse('api-v1:pharmacies:pharmacy-list'), {
            'name': 'Copycat', 'registration_number': 'REG-TAKEN',
        }, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'DUPLICATE_RESOURCE'

    def test_detail_includes_outstanding_balance(self, authenticated_client):
        pharmacy = PharmacyFactory()
        response = authenticated_client.get(
            reverse('api-v1:pharmacies:pharmacy-detail', kwargs={'pk': pharmacy.pk}),
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['data']['outstanding_balance'] == 0

    def test_negative_payment_terms(self, authenticated_client):
        response = authenticated_client.post(reverse('api-v1:pharmacies:pharmacy-list'), {
            'name': 'Bad Terms', 'registration_number': 'REG-NEG', 'payment_terms': -1,
        }, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, authenticated_client):
        pharmacy = PharmacyFactory()
        response = authenticated_client.delete(
            reverse('api-v1:pharmacies:pharmacy-detail', kwargs={'pk': pharmacy.pk}),
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT
        pharmacy.refresh_from_db()
        assert pharmacy.is_deleted is True
