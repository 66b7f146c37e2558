"""
Inventory — Service Layer

Product CRUD, stock top-up and the stock decrement shared by
assignments and invoices. Every write appends an activity entry.

@file inventory/services.py
"""

import logging

from django.conf import settings
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.constants import (
    ACTIVITY_ACTION_CREATED,
    ACTIVITY_ACTION_DELETED,
    ACTIVITY_ACTION_STOCK_ADDED,
    ACTIVITY_ACTION_UPDATED,
)
from core.exceptions import BusinessRuleViolation, ResourceNotFoundError
from core.models import ActivityLog
from core.services import ActivityService

from .models import Product

logger = logging.getLogger('medstock')

SNAPSHOT_FIELDS = [
    'name', 'description', 'category', 'quantity', 'unit', 'manufacturer',
    'batch_number', 'expiry_date', 'reorder_level', 'cost_per_unit',
]


class ProductService:
    """Product lifecycle and stock levels."""

    @staticmethod
    def get_product(product_id) -> Product:
        try:
            return Product.objects.get(pk=product_id, is_deleted=False)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

    @staticmethod
    def snapshot(product: Product) -> dict:
        return ActivityService.snapshot(product, fields=SNAPSHOT_FIELDS)

    @staticmethod
    @transaction.atomic
    def create_product(*, actor=None, **fields) -> Product:
        product = Product(**fields)
        product.full_clean()
        product.created_by = actor
        product.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_CREATED,
            entity_type=ActivityLog.EntityType.PRODUCT,
            entity_id=product.pk,
            details=f'Added product {product.name} ({product.quantity} {product.unit})',
        )
        return product

    @staticmethod
    @transaction.atomic
    def update_product(*, product_id, actor=None, **fields) -> Product:
        try:
            product = Product.objects.select_for_update().get(pk=product_id, is_deleted=False)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail='Product not found.')

        for field, value in fields.items():
            if hasattr(product, field) and field not in ('id', 'pk'):
                setattr(product, field, value)

        product.updated_by = actor
        product.full_clean()
        product.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.PRODUCT,
            entity_id=product.pk,
            details=f'Updated product {product.name}',
        )
        return product

    @staticmethod
    @transaction.atomic
    def delete_product(*, product: Product, actor=None) -> None:
        """Soft delete. Assignments and invoice lines keep their snapshots."""
        product.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.PRODUCT,
            entity_id=product.pk,
            details=f'Deleted product {product.name}',
        )

    @staticmethod
    @transaction.atomic
    def add_stock(*, product_id, quantity: int, actor=None) -> Product:
        if quantity <= 0:
            raise BusinessRuleViolation(detail='Quantity to add must be positive.')

        updated = Product.objects.filter(pk=product_id, is_deleted=False).update(
            quantity=F('quantity') + quantity,
            updated_by=actor,
            updated_at=timezone.now(),
        )
        if not updated:
            raise ResourceNotFoundError(detail='Product not found.')

        product = Product.objects.get(pk=product_id)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_STOCK_ADDED,
            entity_type=ActivityLog.EntityType.PRODUCT,
            entity_id=product.pk,
            details=f'Added {quantity} {product.unit} to {product.name}',
        )
        return product

    @staticmethod
    def decrement_stock(product: Product, quantity: int) -> dict:
        """
        Take a snapshot of ``product`` and write back
        ``snapshot quantity - quantity``. The write is a plain overwrite of
        the value read here, so two concurrent decrements of the same
        product keep only the last one.

        Returns the snapshot taken before the decrement.
        """
        snapshot = ProductService.snapshot(product)
        product.quantity = snapshot['quantity'] - quantity
        product.save(update_fields=['quantity', 'updated_at'])
        logger.info(
            'Stock of %s decremented by %d to %d', product.pk, quantity, product.quantity,
        )
        return snapshot

    # --- Queries ---

    @staticmethod
    def active():
        return Product.objects.filter(is_deleted=False)

    @staticmethod
    def low_stock():
        return (
            Product.objects
            .filter(is_deleted=False, quantity__lte=F('reorder_level'))
            .order_by('quantity', 'name')
        )

    @staticmethod
    def expiring_soon(days: int | None = None):
        """Products not yet expired whose expiry falls within ``days`` (0 < d <= days)."""
        if days is None:
            days = settings.EXPIRY_WARNING_DAYS
        today = timezone.now().date()
        return (
            Product.objects
            .filter(
                is_deleted=False,
                expiry_date__gt=today,
                expiry_date__lte=today + timezone.timedelta(days=days),
            )
            .order_by('expiry_date')
        )

    @staticmethod
    def expired():
        return (
            Product.objects
            .filter(is_deleted=False, expiry_date__lte=timezone.now().date())
            .order_by('expiry_date')
        )

    @staticmethod
    def categories() -> list[str]:
        return list(
            Product.objects
            .filter(is_deleted=False)
            .order_by('category')
            .values_list('category', flat=True)
            .distinct()
        )
