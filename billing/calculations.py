"""
Billing — Invoice Arithmetic

Pure functions for line totals, invoice totals and payment status.
All arithmetic is Decimal; nothing here touches the database and no
percentage is clamped (range checks belong to the serializers).

@file billing/calculations.py
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, NamedTuple

HUNDRED = Decimal('100')
CENT = Decimal('0.01')

STATUS_ISSUED = 'issued'
STATUS_PARTIAL = 'partial'
STATUS_PAID = 'paid'


class InvoiceTotals(NamedTuple):
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal('0')
    return Decimal(str(value))


def quantize_money(value) -> Decimal:
    """Round to cents, half up. Applied only when an amount is stored."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def _field(item: Any, name: str):
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name)


def line_discount(quantity, unit_price, discount_percentage) -> Decimal:
    gross = to_decimal(quantity) * to_decimal(unit_price)
    return gross * to_decimal(discount_percentage) / HUNDRED


def line_total(quantity, unit_price, discount_percentage) -> Decimal:
    """quantity × unit_price × (1 − discount/100)"""
    gross = to_decimal(quantity) * to_decimal(unit_price)
    return gross * (1 - to_decimal(discount_percentage) / HUNDRED)


def compute_invoice_totals(
    items: Iterable[Any],
    discount_percentage=0,
    tax_percentage=0,
) -> InvoiceTotals:
    """
    ``items`` are mappings or objects exposing ``quantity``, ``unit_price``
    and ``discount_percentage``.

    subtotal = Σ line totals; the invoice discount applies to the subtotal
    and tax applies to the discounted amount.
    """
    subtotal = sum(
        (
            line_total(
                _field(item, 'quantity'),
                _field(item, 'unit_price'),
                _field(item, 'discount_percentage') or 0,
            )
            for item in items
        ),
        Decimal('0'),
    )
    discount_amount = subtotal * to_decimal(discount_percentage) / HUNDRED
    after_discount = subtotal - discount_amount
    tax_amount = after_discount * to_decimal(tax_percentage) / HUNDRED
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=after_discount + tax_amount,
    )


def derive_payment_status(paid_amount, total_amount) -> str:
    """First match wins: paid, then issued (nothing paid), else partial."""
    paid = to_decimal(paid_amount)
    if paid >= to_decimal(total_amount):
        return STATUS_PAID
    if paid == 0:
        return STATUS_ISSUED
    return STATUS_PARTIAL


def apply_payment(paid_amount, total_amount, amount) -> tuple[Decimal, str]:
    """Add ``amount`` to what was already paid. Overpayment is accepted."""
    new_paid = to_decimal(paid_amount) + to_decimal(amount)
    return new_paid, derive_payment_status(new_paid, total_amount)
