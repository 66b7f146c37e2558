"""
Billing — Service Layer

Invoice lifecycle (numbering, snapshots, totals, status changes) and
payment recording. Totals always go through billing.calculations; the
stored amounts are the only place where rounding to cents happens.

Creating an invoice decrements stock for every line, exactly like an
assignment. Adding or removing a line on an existing invoice only
recomputes totals and leaves stock alone.

@file billing/services.py
"""

import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.constants import (
    ACTIVITY_ACTION_CREATED,
    ACTIVITY_ACTION_DELETED,
    ACTIVITY_ACTION_PAYMENT_RECORDED,
    ACTIVITY_ACTION_STATUS_CHANGED,
    ACTIVITY_ACTION_UPDATED,
)
from core.exceptions import BusinessRuleViolation, InvalidStateTransition, ResourceNotFoundError
from core.models import ActivityLog
from core.services import ActivityService
from inventory.services import ProductService
from pharmacies.services import PharmacyService

from . import calculations
from .models import Invoice, InvoiceItem, Payment

logger = logging.getLogger('medstock')

Status = Invoice.StatusChoices

# Manual status changes. partial and paid are reached through payments only.
INVOICE_TRANSITIONS = {
    Status.DRAFT: {Status.ISSUED, Status.CANCELLED},
    Status.ISSUED: {Status.OVERDUE, Status.CANCELLED},
    Status.PARTIAL: {Status.OVERDUE, Status.CANCELLED},
    Status.OVERDUE: {Status.CANCELLED},
    Status.PAID: set(),
    Status.CANCELLED: set(),
}

# Totals of a settled or voided invoice are frozen.
LOCKED_STATUSES = {Status.PAID, Status.CANCELLED}

HEADER_FIELDS = ('pharmacy', 'issue_date', 'due_date', 'discount_percentage', 'tax_percentage', 'notes')


def _assert_transition(invoice: Invoice, new_status: str) -> None:
    allowed = INVOICE_TRANSITIONS.get(invoice.status, set())
    if new_status not in allowed:
        raise InvalidStateTransition(
            detail=f'Cannot move invoice {invoice.invoice_number} from {invoice.status} to {new_status}.',
        )


def _assert_editable(invoice: Invoice) -> None:
    if invoice.status in LOCKED_STATUSES:
        raise InvalidStateTransition(
            detail=f'Invoice {invoice.invoice_number} is {invoice.status}; its amounts can no longer change.',
        )


def _recompute_invoice_totals(invoice: Invoice) -> calculations.InvoiceTotals:
    """
    Store fresh totals. An invoice that already received money gets its
    payment status derived again from the new total; overdue stays overdue
    unless the invoice is now fully paid.
    """
    totals = calculations.compute_invoice_totals(
        invoice.items.filter(is_deleted=False),
        invoice.discount_percentage,
        invoice.tax_percentage,
    )
    invoice.apply_totals(totals)
    if invoice.paid_amount > 0 and invoice.status in (Status.ISSUED, Status.PARTIAL, Status.OVERDUE):
        derived = calculations.derive_payment_status(invoice.paid_amount, invoice.total_amount)
        if derived == Status.PAID or invoice.status != Status.OVERDUE:
            invoice.status = derived
    invoice.save(update_fields=[
        'subtotal', 'discount_amount', 'tax_amount', 'total_amount', 'status', 'updated_at',
    ])
    return totals


def _build_item(invoice: Invoice, *, product, quantity: int, unit_price=None,
                discount_percentage=0, product_snapshot=None, actor=None) -> InvoiceItem:
    item = InvoiceItem(
        invoice=invoice,
        product=product,
        product_snapshot=product_snapshot or ProductService.snapshot(product),
        quantity=quantity,
        unit_price=unit_price if unit_price is not None else product.cost_per_unit,
        discount_percentage=discount_percentage or Decimal('0'),
    )
    item.compute_amounts()
    item.created_by = actor
    return item


class InvoiceService:
    """Invoice lifecycle: numbering, items, totals and status."""

    @staticmethod
    def generate_invoice_number(issue_date=None) -> str:
        """
        ``{prefix}{yy}{mm}{NNNN}`` with a sequence restarting every month.
        Deleted invoices keep their numbers, so they count too.
        """
        issue_date = issue_date or timezone.localdate()
        prefix = f'{settings.INVOICE_NUMBER_PREFIX}{issue_date:%y%m}'
        max_seq = 0
        for number in Invoice.objects.filter(invoice_number__startswith=prefix).values_list(
            'invoice_number', flat=True,
        ):
            try:
                max_seq = max(max_seq, int(number[len(prefix):]))
            except ValueError:
                continue
        return f'{prefix}{max_seq + 1:04d}'

    @staticmethod
    def get_invoice(invoice_id) -> Invoice:
        try:
            return Invoice.objects.get(pk=invoice_id, is_deleted=False)
        except Invoice.DoesNotExist:
            raise ResourceNotFoundError(detail='Invoice not found.')

    @staticmethod
    @transaction.atomic
    def create_invoice(
        *,
        pharmacy,
        items: list[dict],
        issue_date=None,
        due_date=None,
        discount_percentage=0,
        tax_percentage=0,
        notes: str = '',
        actor=None,
    ) -> Invoice:
        """
        ``items`` is a list of ``{product, quantity, unit_price?,
        discount_percentage?}``. A missing unit price falls back to the
        product's cost per unit; a missing due date to the pharmacy's
        payment terms.
        """
        if not items:
            raise BusinessRuleViolation(detail='An invoice needs at least one item.')

        issue_date = issue_date or timezone.localdate()
        if due_date is None:
            due_date = issue_date + timedelta(days=pharmacy.payment_terms)

        invoice = Invoice(
            invoice_number=InvoiceService.generate_invoice_number(issue_date),
            pharmacy=pharmacy,
            pharmacy_snapshot=PharmacyService.snapshot(pharmacy),
            issue_date=issue_date,
            due_date=due_date,
            discount_percentage=discount_percentage,
            tax_percentage=tax_percentage,
            notes=notes,
            status=Status.DRAFT,
            paid_amount=Decimal('0'),
        )
        invoice.created_by = actor

        lines = []
        for line in items:
            product = line['product']
            snapshot = ProductService.decrement_stock(product, line['quantity'])
            lines.append(_build_item(
                invoice,
                product=product,
                quantity=line['quantity'],
                unit_price=line.get('unit_price'),
                discount_percentage=line.get('discount_percentage'),
                product_snapshot=snapshot,
                actor=actor,
            ))

        invoice.apply_totals(calculations.compute_invoice_totals(
            lines, discount_percentage, tax_percentage,
        ))
        invoice.save()
        for item in lines:
            item.save()

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_CREATED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=f'Created invoice {invoice.invoice_number} for {pharmacy.name} ({invoice.total_amount})',
        )
        logger.info('Invoice %s created with %d items', invoice.invoice_number, len(lines))
        return invoice

    @staticmethod
    @transaction.atomic
    def update_invoice(*, invoice_id, actor=None, **fields) -> Invoice:
        """Update header fields; totals are recomputed when a percentage changes."""
        try:
            invoice = Invoice.objects.select_for_update().get(pk=invoice_id, is_deleted=False)
        except Invoice.DoesNotExist:
            raise ResourceNotFoundError(detail='Invoice not found.')

        recompute = False
        for field in HEADER_FIELDS:
            if field not in fields:
                continue
            value = fields[field]
            if field in ('discount_percentage', 'tax_percentage') and value != getattr(invoice, field):
                recompute = True
            setattr(invoice, field, value)
        if recompute:
            _assert_editable(invoice)
        if invoice.due_date and invoice.issue_date and invoice.due_date < invoice.issue_date:
            raise BusinessRuleViolation(detail='Due date cannot be before the issue date.')
        if 'pharmacy' in fields and fields['pharmacy'] is not None:
            invoice.pharmacy_snapshot = PharmacyService.snapshot(fields['pharmacy'])

        invoice.updated_by = actor
        invoice.save()
        if recompute:
            _recompute_invoice_totals(invoice)

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=f'Updated invoice {invoice.invoice_number}',
        )
        return invoice

    @staticmethod
    @transaction.atomic
    def delete_invoice(*, invoice: Invoice, actor=None) -> None:
        """Soft delete. Stock taken by the invoice is not returned."""
        invoice.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=f'Deleted invoice {invoice.invoice_number}',
        )

    @staticmethod
    @transaction.atomic
    def add_item(*, invoice: Invoice, product, quantity: int, unit_price=None,
                 discount_percentage=0, actor=None) -> InvoiceItem:
        invoice = Invoice.objects.select_for_update().get(pk=invoice.pk)
        _assert_editable(invoice)
        item = _build_item(
            invoice,
            product=product,
            quantity=quantity,
            unit_price=unit_price,
            discount_percentage=discount_percentage,
            actor=actor,
        )
        item.save()
        _recompute_invoice_totals(invoice)

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=f'Added {quantity} x {product.name} to invoice {invoice.invoice_number}',
        )
        return item

    @staticmethod
    @transaction.atomic
    def remove_item(*, invoice: Invoice, item_id, actor=None) -> None:
        invoice = Invoice.objects.select_for_update().get(pk=invoice.pk)
        _assert_editable(invoice)
        try:
            item = invoice.items.get(pk=item_id, is_deleted=False)
        except InvoiceItem.DoesNotExist:
            raise ResourceNotFoundError(detail='Invoice item not found.')

        item.soft_delete(user=actor)
        _recompute_invoice_totals(invoice)

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_UPDATED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=(
                f'Removed {item.product_snapshot.get("name", "item")} '
                f'from invoice {invoice.invoice_number}'
            ),
        )

    @staticmethod
    @transaction.atomic
    def update_status(*, invoice_id, status: str, actor=None) -> Invoice:
        try:
            invoice = Invoice.objects.select_for_update().get(pk=invoice_id, is_deleted=False)
        except Invoice.DoesNotExist:
            raise ResourceNotFoundError(detail='Invoice not found.')

        _assert_transition(invoice, status)
        previous = invoice.status
        invoice.status = status
        invoice.updated_by = actor
        invoice.save(update_fields=['status', 'updated_by', 'updated_at'])

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_STATUS_CHANGED,
            entity_type=ActivityLog.EntityType.INVOICE,
            entity_id=invoice.pk,
            details=f'Invoice {invoice.invoice_number}: {previous} -> {status}',
        )
        return invoice

    @staticmethod
    def mark_overdue(today=None) -> int:
        """Flag issued and partially paid invoices whose due date has passed."""
        today = today or timezone.localdate()
        count = (
            Invoice.objects
            .filter(
                is_deleted=False,
                status__in=[Status.ISSUED, Status.PARTIAL],
                due_date__lt=today,
            )
            .update(status=Status.OVERDUE, updated_at=timezone.now())
        )
        if count:
            logger.info('Marked %d invoices overdue', count)
        return count


class PaymentService:
    """Recording payments against invoices."""

    @staticmethod
    @transaction.atomic
    def record_payment(
        *,
        invoice_id,
        amount,
        payment_date=None,
        payment_method: str = Payment.MethodChoices.CASH,
        reference_number: str = '',
        notes: str = '',
        actor=None,
    ) -> Payment:
        """
        Add ``amount`` to the invoice's paid amount and derive its status.
        Paying more than the total is accepted and leaves the invoice paid.
        """
        try:
            invoice = Invoice.objects.select_for_update().get(pk=invoice_id, is_deleted=False)
        except Invoice.DoesNotExist:
            raise ResourceNotFoundError(detail='Invoice not found.')

        if invoice.status == Status.CANCELLED:
            raise BusinessRuleViolation(detail='Cannot record a payment on a cancelled invoice.')
        amount = calculations.to_decimal(amount)
        if amount <= 0:
            raise BusinessRuleViolation(detail='Payment amount must be positive.')

        payment = Payment(
            invoice=invoice,
            amount=amount,
            payment_date=payment_date or timezone.localdate(),
            payment_method=payment_method,
            reference_number=reference_number,
            notes=notes,
        )
        payment.created_by = actor
        payment.full_clean()
        payment.save()

        paid_amount, status = calculations.apply_payment(
            invoice.paid_amount, invoice.total_amount, amount,
        )
        invoice.paid_amount = calculations.quantize_money(paid_amount)
        invoice.status = status
        invoice.save(update_fields=['paid_amount', 'status', 'updated_at'])

        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_PAYMENT_RECORDED,
            entity_type=ActivityLog.EntityType.PAYMENT,
            entity_id=payment.pk,
            details=f'Recorded {amount} on invoice {invoice.invoice_number} (now {status})',
        )
        logger.info('Payment %s recorded on %s', payment.pk, invoice.invoice_number)
        return payment

    @staticmethod
    @transaction.atomic
    def delete_payment(*, payment: Payment, actor=None) -> None:
        """Soft delete. The invoice's paid amount and status stay as they are."""
        payment.soft_delete(user=actor)
        ActivityService.log(
            actor=actor,
            action=ACTIVITY_ACTION_DELETED,
            entity_type=ActivityLog.EntityType.PAYMENT,
            entity_id=payment.pk,
            details=f'Deleted payment of {payment.amount} on invoice {payment.invoice.invoice_number}',
        )

    @staticmethod
    def for_invoice(invoice: Invoice):
        return invoice.payments.filter(is_deleted=False).order_by('-payment_date', '-created_at')
