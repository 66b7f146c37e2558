"""
Billing — Invoice PDF

Tabular invoice layout: pharmacy block, line items, then subtotal,
discount, tax, total, paid and balance due.

@file billing/pdf.py
"""

from django.conf import settings
from reportlab.lib.units import mm

from core.pdf import LEFT_MARGIN, LINE_HEIGHT, draw_header, draw_table, finish, fmt_date, new_canvas

from .models import Invoice

ITEM_HEADERS = ['#', 'Product', 'Qty', 'Unit price', 'Disc %', 'Amount']
ITEM_WIDTHS = [10, 70, 18, 25, 18, 30]


def invoice_filename(invoice: Invoice) -> str:
    return f'invoice-{invoice.invoice_number}.pdf'


def build_invoice_pdf(invoice: Invoice) -> bytes:
    c, buf = new_canvas()
    y = draw_header(c, f'Invoice {invoice.invoice_number}', invoice.get_status_display())

    pharmacy = invoice.pharmacy_snapshot or {}
    c.setFont('Helvetica', 9)
    for line in (
        f'Bill to  : {pharmacy.get("name", "")}',
        f'Address  : {pharmacy.get("address", "")}',
        f'Reg. no. : {pharmacy.get("registration_number", "")}',
        f'Issued   : {fmt_date(invoice.issue_date)}',
        f'Due      : {fmt_date(invoice.due_date)}',
    ):
        c.drawString(LEFT_MARGIN, y, line)
        y -= LINE_HEIGHT
    y -= LINE_HEIGHT

    rows = [
        [
            idx,
            item.product_snapshot.get('name', ''),
            item.quantity,
            item.unit_price,
            item.discount_percentage,
            item.total_amount,
        ]
        for idx, item in enumerate(invoice.items.filter(is_deleted=False), start=1)
    ]
    y = draw_table(c, y, ITEM_HEADERS, rows, ITEM_WIDTHS)

    y -= LINE_HEIGHT
    label_x = LEFT_MARGIN + 110 * mm
    value_x = LEFT_MARGIN + 170 * mm
    currency = settings.CURRENCY
    for label, value, bold in (
        ('Subtotal', invoice.subtotal, False),
        (f'Discount ({invoice.discount_percentage}%)', -invoice.discount_amount, False),
        (f'Tax ({invoice.tax_percentage}%)', invoice.tax_amount, False),
        ('Total', invoice.total_amount, True),
        ('Paid', invoice.paid_amount, False),
        ('Balance due', invoice.balance_due, True),
    ):
        c.setFont('Helvetica-Bold' if bold else 'Helvetica', 9)
        c.drawString(label_x, y, label)
        c.drawRightString(value_x, y, f'{value:.2f} {currency}')
        y -= LINE_HEIGHT

    if invoice.notes:
        y -= LINE_HEIGHT
        c.setFont('Helvetica-Oblique', 8)
        c.drawString(LEFT_MARGIN, y, invoice.notes[:120])

    return finish(c, buf)
