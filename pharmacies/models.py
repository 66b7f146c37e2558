"""
Pharmacies — Models

Pharmacy: an external billing entity that receives invoices for the
stock it is supplied. Carries its credit limit and payment terms.

@file pharmacies/models.py
"""

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel


class Pharmacy(RegulatedModel):
    """
    registration_number is unique among non-deleted pharmacies; a deleted
    pharmacy's number can be reused.
    """

    name = models.CharField(_('name'), max_length=255, db_index=True)
    contact_person = models.CharField(_('contact person'), max_length=255, blank=True)
    contact_number = models.CharField(_('contact number'), max_length=30, blank=True)
    email = models.EmailField(_('email'), blank=True)
    address = models.CharField(_('address'), max_length=500, blank=True)
    registration_number = models.CharField(_('registration number'), max_length=100, db_index=True)
    credit_limit = models.DecimalField(
        _('credit limit'), max_digits=14, decimal_places=2, default=0,
        validators=[MinValueValidator(0)],
    )
    payment_terms = models.PositiveIntegerField(
        _('payment terms (days)'), default=30,
    )

    class Meta:
        verbose_name = _('pharmacy')
        verbose_name_plural = _('pharmacies')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['registration_number'],
                condition=models.Q(is_deleted=False),
                name='unique_active_pharmacy_registration_number',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.registration_number})'
