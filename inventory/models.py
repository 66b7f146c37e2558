"""
Inventory — Models

Product: a stocked medical item with its batch, expiry date, reorder
level and unit cost. Quantity is decremented by assignments and
invoices and increased by add-stock.

@file inventory/models.py
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel


class Product(RegulatedModel):
    """A stocked item (medication, PPE, consumable...)."""

    name = models.CharField(_('name'), max_length=255, db_index=True)
    description = models.TextField(_('description'), blank=True)
    category = models.CharField(_('category'), max_length=100, db_index=True)
    quantity = models.IntegerField(_('quantity'), default=0)
    unit = models.CharField(_('unit'), max_length=50)
    manufacturer = models.CharField(_('manufacturer'), max_length=255, blank=True)
    batch_number = models.CharField(_('batch number'), max_length=100, blank=True)
    expiry_date = models.DateField(_('expiry date'), db_index=True)
    reorder_level = models.PositiveIntegerField(_('reorder level'), default=0)
    cost_per_unit = models.DecimalField(
        _('cost per unit'), max_digits=12, decimal_places=2,
        validators=[MinValueValidator(0)],
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['category', 'is_deleted'], name='inventory_p_categor_3e5a1b_idx'),
        ]

    def __str__(self):
        batch = f' [{self.batch_number}]' if self.batch_number else ''
        return f'{self.name}{batch}'

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.reorder_level

    @property
    def days_to_expiry(self) -> int | None:
        if not self.expiry_date:
            return None
        return (self.expiry_date - timezone.now().date()).days

    @property
    def is_expired(self) -> bool:
        days = self.days_to_expiry
        return days is not None and days <= 0

    def is_expiring_soon(self, threshold: int | None = None) -> bool:
        if threshold is None:
            threshold = settings.EXPIRING_SOON_DEFAULT_DAYS
        days = self.days_to_expiry
        return days is not None and 0 < days <= threshold
