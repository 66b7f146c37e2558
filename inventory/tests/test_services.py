"""
Inventory — Service Tests

@file inventory/tests/test_services.py
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.utils import timezone

from core.exceptions import BusinessRuleViolation, ResourceNotFoundError
from core.models import ActivityLog
from inventory.services import ProductService
from tests.factories import ProductFactory, UserFactory

pytestmark = pytest.mark.django_db


def _product_fields(**overrides):
    fields = {
        'name': 'Amoxicillin 250mg',
        'category': 'Antibiotics',
        'quantity': 40,
        'unit': 'box',
        'expiry_date': timezone.now().date() + timedelta(days=400),
        'reorder_level': 5,
        'cost_per_unit': Decimal('4.20'),
    }
    fields.update(overrides)
    return fields


class TestProductLifecycle:
    def test_create_logs_activity(self):
        actor = UserFactory()
        product = ProductService.create_product(actor=actor, **_product_fields())
        assert product.created_by == actor
        entry = ActivityLog.objects.get(entity_id=str(product.pk))
        assert entry.action == 'created'
        assert entry.actor == actor

    def test_create_rejects_negative_cost(self):
        with pytest.raises(ValidationError):
            ProductService.create_product(**_product_fields(cost_per_unit=Decimal('-1')))

    def test_update(self):
        product = ProductFactory()
        updated = ProductService.update_product(product_id=product.pk, name='Renamed', reorder_level=3)
        assert updated.name == 'Renamed'
        assert updated.reorder_level == 3

    def test_update_deleted_product(self):
        product = ProductFactory(is_deleted=True)
        with pytest.raises(ResourceNotFoundError):
            ProductService.update_product(product_id=product.pk, name='x')

    def test_delete_is_soft(self):
        product = ProductFactory()
        ProductService.delete_product(product=product)
        product.refresh_from_db()
        assert product.is_deleted is True
        assert product not in ProductService.active()


class TestStockLevels:
    def test_add_stock(self):
        product = ProductFactory(quantity=10)
        product = ProductService.add_stock(product_id=product.pk, quantity=15)
        assert product.quantity == 25
        assert ActivityLog.objects.filter(action='stock_added', entity_id=str(product.pk)).exists()

    @pytest.mark.parametrize('quantity', [0, -5])
    def test_add_stock_must_be_positive(self, quantity):
        product = ProductFactory()
        with pytest.raises(BusinessRuleViolation):
            ProductService.add_stock(product_id=product.pk, quantity=quantity)

    def test_decrement_returns_snapshot_before_change(self):
        product = ProductFactory(quantity=30)
        snapshot = ProductService.decrement_stock(product, 12)
        assert snapshot['quantity'] == 30
        product.refresh_from_db()
        assert product.quantity == 18

    def test_decrement_overwrites_stale_value(self):
        product = ProductFactory(quantity=30)
        stale = type(product).objects.get(pk=product.pk)
        ProductService.decrement_stock(product, 5)
        ProductService.decrement_stock(stale, 10)
        product.refresh_from_db()
        assert product.quantity == 20


class TestQueries:
    def test_low_stock(self):
        low = ProductFactory(quantity=2, reorder_level=5)
        ProductFactory(quantity=50, reorder_level=5)
        assert list(ProductService.low_stock()) == [low]

    def test_expiring_soon_window(self):
        today = timezone.now().date()
        soon = ProductFactory(expiry_date=today + timedelta(days=20))
        ProductFactory(expiry_date=today)
        ProductFactory(expiry_date=today + timedelta(days=45))
        assert list(ProductService.expiring_soon(days=30)) == [soon]

    def test_expired(self):
        gone = ProductFactory(expiry_date=timezone.now().date() - timedelta(days=1))
        ProductFactory()
        assert list(ProductService.expired()) == [gone]

    def test_categories_are_distinct(self):
        ProductFactory(category='Vaccines')
        ProductFactory(category='Vaccines')
        ProductFactory(category='Antibiotics')
        ProductFactory(category='Dressings', is_deleted=True)
        assert ProductService.categories() == ['Antibiotics', 'Vaccines']
