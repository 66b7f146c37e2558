"""
Tests — invoice arithmetic and payment status derivation.

@file billing/tests/test_calculations.py
"""

from decimal import Decimal

import pytest

from billing.calculations import (
    InvoiceTotals,
    apply_payment,
    compute_invoice_totals,
    derive_payment_status,
    line_discount,
    line_total,
    quantize_money,
)


class TestLineAmounts:
    def test_line_total_applies_item_discount(self):
        assert line_total(10, Decimal('2.00'), 10) == Decimal('18.00')

    def test_line_discount(self):
        assert line_discount(10, Decimal('2.00'), 10) == Decimal('2.00')

    def test_zero_discount(self):
        assert line_total(3, Decimal('4.50'), 0) == Decimal('13.50')


class TestInvoiceTotals:
    def test_discount_then_tax(self):
        items = [{'quantity': 10, 'unit_price': Decimal('2.00'), 'discount_percentage': Decimal('10')}]
        totals = compute_invoice_totals(items, discount_percentage=0, tax_percentage=10)
        assert totals.subtotal == Decimal('18.00')
        assert totals.discount_amount == 0
        assert totals.tax_amount == Decimal('1.80')
        assert totals.total == Decimal('19.80')

    def test_invoice_discount_applies_before_tax(self):
        items = [
            {'quantity': 2, 'unit_price': '50', 'discount_percentage': 0},
            {'quantity': 1, 'unit_price': '100', 'discount_percentage': None},
        ]
        totals = compute_invoice_totals(items, discount_percentage=Decimal('10'), tax_percentage=Decimal('5'))
        assert totals == InvoiceTotals(
            subtotal=Decimal('200'),
            discount_amount=Decimal('20'),
            tax_amount=Decimal('9'),
            total=Decimal('189'),
        )

    def test_accepts_objects(self):
        class Line:
            quantity = 4
            unit_price = Decimal('2.50')
            discount_percentage = Decimal('0')

        assert compute_invoice_totals([Line()]).total == Decimal('10.00')

    @pytest.mark.parametrize('lines, expected_subtotal', [
        ([(3, '0.10', '0')] * 10, Decimal('3.00')),
        ([(7, '1.333', '15')], Decimal('7.93135')),
        ([(3, '0.10', '0'), (7, '1.333', '15'), (11, '0.07', '33.33')], Decimal('8.744709')),
        ([(1, '0.01', '0')] * 99 + [(1, '0.1', '0')] * 7, Decimal('1.69')),
    ])
    def test_subtotal_is_exact_decimal_sum(self, lines, expected_subtotal):
        items = [
            {'quantity': qty, 'unit_price': price, 'discount_percentage': disc}
            for qty, price, disc in lines
        ]
        independent = sum(
            (Decimal(qty) * Decimal(price) * (1 - Decimal(disc) / 100) for qty, price, disc in lines),
            Decimal('0'),
        )
        totals = compute_invoice_totals(items)
        assert totals.subtotal == independent == expected_subtotal
        assert totals.total == expected_subtotal

    def test_no_items(self):
        totals = compute_invoice_totals([], 10, 10)
        assert totals.subtotal == 0
        assert totals.total == 0

    def test_out_of_range_percentages_are_not_clamped(self):
        items = [{'quantity': 1, 'unit_price': '100', 'discount_percentage': 0}]
        totals = compute_invoice_totals(items, discount_percentage=150)
        assert totals.total == Decimal('-50')


class TestPaymentStatus:
    @pytest.mark.parametrize('paid, total, expected', [
        ('100', '100', 'paid'),
        ('120', '100', 'paid'),
        ('0', '100', 'issued'),
        ('40', '100', 'partial'),
        ('0', '0', 'paid'),
    ])
    def test_derive_payment_status(self, paid, total, expected):
        assert derive_payment_status(Decimal(paid), Decimal(total)) == expected

    def test_apply_payment_accumulates(self):
        paid, status = apply_payment(Decimal('10.00'), Decimal('19.80'), Decimal('5.00'))
        assert paid == Decimal('15.00')
        assert status == 'partial'

    def test_overpayment_is_accepted(self):
        paid, status = apply_payment(Decimal('0'), Decimal('19.80'), Decimal('50'))
        assert paid == Decimal('50')
        assert status == 'paid'


def test_quantize_money_rounds_half_up():
    assert quantize_money(Decimal('1.005')) == Decimal('1.01')
    assert quantize_money('2.344') == Decimal('2.34')
