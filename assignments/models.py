"""
Assignments — Models

Assignment: a recorded transfer of product quantity to a client.
Product and client are referenced and also copied into JSON snapshots
taken at creation, so later edits or deletions of either never alter
the historical record.

@file assignments/models.py
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel


class Assignment(RegulatedModel):

    product = models.ForeignKey(
        'inventory.Product',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='assignments',
        verbose_name=_('product'),
    )
    client = models.ForeignKey(
        'clients.Client',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='assignments',
        verbose_name=_('client'),
    )
    product_snapshot = models.JSONField(_('product snapshot'), default=dict)
    client_snapshot = models.JSONField(_('client snapshot'), default=dict)
    quantity = models.PositiveIntegerField(_('quantity'), validators=[MinValueValidator(1)])
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='assignments',
        verbose_name=_('assigned by'),
    )
    notes = models.TextField(_('notes'), blank=True)

    class Meta:
        verbose_name = _('assignment')
        verbose_name_plural = _('assignments')
        ordering = ['-created_at']

    def __str__(self):
        return (
            f'{self.quantity} × {self.product_snapshot.get("name", "?")} '
            f'→ {self.client_snapshot.get("name", "?")}'
        )
