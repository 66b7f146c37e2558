"""
Billing — Models

Invoice (with line items) raised against a pharmacy, and the payments
recorded against it. Pharmacy and product details are copied into JSON
snapshots at creation; the foreign keys are kept for navigation only
and are nulled if the referenced row is ever hard-deleted.

@file billing/models.py
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel

from . import calculations

PERCENTAGE_VALIDATORS = [MinValueValidator(0), MaxValueValidator(100)]


class Invoice(RegulatedModel):

    class StatusChoices(models.TextChoices):
        DRAFT = 'draft', _('Draft')
        ISSUED = calculations.STATUS_ISSUED, _('Issued')
        PARTIAL = calculations.STATUS_PARTIAL, _('Partially paid')
        PAID = calculations.STATUS_PAID, _('Paid')
        OVERDUE = 'overdue', _('Overdue')
        CANCELLED = 'cancelled', _('Cancelled')

    invoice_number = models.CharField(_('invoice number'), max_length=20, unique=True)
    pharmacy = models.ForeignKey(
        'pharmacies.Pharmacy',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='invoices',
        verbose_name=_('pharmacy'),
    )
    pharmacy_snapshot = models.JSONField(_('pharmacy snapshot'), default=dict)
    issue_date = models.DateField(_('issue date'), default=timezone.localdate, db_index=True)
    due_date = models.DateField(_('due date'), db_index=True)

    subtotal = models.DecimalField(_('subtotal'), max_digits=14, decimal_places=2, default=0)
    discount_percentage = models.DecimalField(
        _('discount %'), max_digits=5, decimal_places=2, default=0,
        validators=PERCENTAGE_VALIDATORS,
    )
    discount_amount = models.DecimalField(_('discount amount'), max_digits=14, decimal_places=2, default=0)
    tax_percentage = models.DecimalField(
        _('tax %'), max_digits=5, decimal_places=2, default=0,
        validators=PERCENTAGE_VALIDATORS,
    )
    tax_amount = models.DecimalField(_('tax amount'), max_digits=14, decimal_places=2, default=0)
    total_amount = models.DecimalField(_('total amount'), max_digits=14, decimal_places=2, default=0)
    paid_amount = models.DecimalField(_('paid amount'), max_digits=14, decimal_places=2, default=0)

    status = models.CharField(
        _('status'), max_length=12,
        choices=StatusChoices.choices, default=StatusChoices.DRAFT,
        db_index=True,
    )
    notes = models.TextField(_('notes'), blank=True)

    class Meta:
        verbose_name = _('invoice')
        verbose_name_plural = _('invoices')
        ordering = ['-issue_date', '-invoice_number']
        indexes = [
            models.Index(fields=['status', 'due_date'], name='billing_inv_status_7c2d41_idx'),
        ]

    def __str__(self):
        return f'{self.invoice_number} ({self.pharmacy_snapshot.get("name", "")})'

    @property
    def balance_due(self):
        return self.total_amount - self.paid_amount

    def apply_totals(self, totals: calculations.InvoiceTotals) -> None:
        self.subtotal = calculations.quantize_money(totals.subtotal)
        self.discount_amount = calculations.quantize_money(totals.discount_amount)
        self.tax_amount = calculations.quantize_money(totals.tax_amount)
        self.total_amount = calculations.quantize_money(totals.total)


class InvoiceItem(RegulatedModel):

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('invoice'),
    )
    product = models.ForeignKey(
        'inventory.Product',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='invoice_items',
        verbose_name=_('product'),
    )
    product_snapshot = models.JSONField(_('product snapshot'), default=dict)
    quantity = models.PositiveIntegerField(_('quantity'), validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(_('unit price'), max_digits=12, decimal_places=2)
    discount_percentage = models.DecimalField(
        _('discount %'), max_digits=5, decimal_places=2, default=0,
        validators=PERCENTAGE_VALIDATORS,
    )
    discount_amount = models.DecimalField(_('discount amount'), max_digits=14, decimal_places=2, default=0)
    total_amount = models.DecimalField(_('total amount'), max_digits=14, decimal_places=2, default=0)

    class Meta:
        verbose_name = _('invoice item')
        verbose_name_plural = _('invoice items')
        ordering = ['invoice', 'created_at']

    def __str__(self):
        return f'{self.invoice_id}: {self.product_snapshot.get("name", "?")} × {self.quantity}'

    def compute_amounts(self) -> None:
        self.discount_amount = calculations.quantize_money(
            calculations.line_discount(self.quantity, self.unit_price, self.discount_percentage),
        )
        self.total_amount = calculations.quantize_money(
            calculations.line_total(self.quantity, self.unit_price, self.discount_percentage),
        )


class Payment(RegulatedModel):

    class MethodChoices(models.TextChoices):
        CASH = 'cash', _('Cash')
        BANK_TRANSFER = 'bank_transfer', _('Bank transfer')
        CHECK = 'check', _('Check')
        CREDIT_CARD = 'credit_card', _('Credit card')

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name='payments',
        verbose_name=_('invoice'),
    )
    payment_date = models.DateField(_('payment date'), default=timezone.localdate)
    amount = models.DecimalField(_('amount'), max_digits=14, decimal_places=2)
    payment_method = models.CharField(
        _('payment method'), max_length=20,
        choices=MethodChoices.choices, default=MethodChoices.CASH,
    )
    reference_number = models.CharField(_('reference number'), max_length=100, blank=True)
    notes = models.TextField(_('notes'), blank=True)

    class Meta:
        verbose_name = _('payment')
        verbose_name_plural = _('payments')
        ordering = ['-payment_date', '-created_at']

    def __str__(self):
        return f'{self.amount} ({self.get_payment_method_display()}) on {self.invoice_id}'
