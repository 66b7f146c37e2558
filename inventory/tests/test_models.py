"""
Inventory — Model Tests

@file inventory/tests/test_models.py
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from tests.factories import ProductFactory


def _in_days(n):
    return timezone.now().date() + timedelta(days=n)


@pytest.mark.django_db
class TestProductFlags:
    def test_low_stock_includes_reorder_level(self):
        assert ProductFactory(quantity=10, reorder_level=10).is_low_stock is True
        assert ProductFactory(quantity=11, reorder_level=10).is_low_stock is False

    @pytest.mark.parametrize('days, expired', [(-3, True), (0, True), (1, False)])
    def test_expired(self, days, expired):
        assert ProductFactory(expiry_date=_in_days(days)).is_expired is expired

    def test_expiring_soon_default_threshold(self, settings):
        settings.EXPIRING_SOON_DEFAULT_DAYS = 30
        assert ProductFactory(expiry_date=_in_days(30)).is_expiring_soon() is True
        assert ProductFactory(expiry_date=_in_days(31)).is_expiring_soon() is False
        assert ProductFactory(expiry_date=_in_days(0)).is_expiring_soon() is False

    def test_expiring_soon_custom_threshold(self):
        assert ProductFactory(expiry_date=_in_days(60)).is_expiring_soon(90) is True

    def test_str_includes_batch(self):
        product = ProductFactory(name='Saline 0.9%', batch_number='B-17')
        assert str(product) == 'Saline 0.9% [B-17]'
