"""
Reports — PDF & Spreadsheet Exports

Turns report rows into a table (headers + plain cell values) and writes
it either as a PDF via reportlab or as an .xlsx workbook via openpyxl.

@file reports/exports.py
"""

from datetime import date
from decimal import Decimal
from io import BytesIO

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from core.pdf import LEFT_MARGIN, draw_header, draw_table, finish, fmt_date, new_canvas

from .services import ASSIGNMENTS, EXPIRY, INVENTORY

TITLES = {
    INVENTORY: 'Inventory Report',
    EXPIRY: 'Expiry Report',
    ASSIGNMENTS: 'Assignments Report',
}

PDF_COLUMN_WIDTHS = {
    INVENTORY: [55, 30, 18, 18, 25, 30],
    EXPIRY: [55, 30, 18, 18, 25, 30],
    ASSIGNMENTS: [45, 40, 18, 18, 25, 30],
}


def _money(value) -> float:
    return float(Decimal(str(value or '0')))


def _expiry_status(product) -> str:
    if product.is_expired:
        return 'Expired'
    return f'{product.days_to_expiry} days'


def pdf_table(report_type: str, rows) -> tuple[list[str], list[list]]:
    if report_type == INVENTORY:
        headers = ['Product Name', 'Category', 'Quantity', 'Unit', 'Expiry Date', 'Manufacturer']
        data = [
            [p.name, p.category, p.quantity, p.unit, fmt_date(p.expiry_date), p.manufacturer]
            for p in rows
        ]
    elif report_type == EXPIRY:
        headers = ['Product Name', 'Category', 'Quantity', 'Unit', 'Expiry Date', 'Status']
        data = [
            [p.name, p.category, p.quantity, p.unit, fmt_date(p.expiry_date), _expiry_status(p)]
            for p in rows
        ]
    else:
        headers = ['Product', 'Client', 'Quantity', 'Unit', 'Date', 'Assigned By']
        data = [
            [
                a.product_snapshot.get('name', ''),
                a.client_snapshot.get('name', ''),
                a.quantity,
                a.product_snapshot.get('unit', ''),
                fmt_date(a.created_at.date()),
                a.assigned_by.name if a.assigned_by else '',
            ]
            for a in rows
        ]
    return headers, data


def sheet_table(report_type: str, rows) -> tuple[list[str], list[list]]:
    if report_type == INVENTORY:
        headers = [
            'Product Name', 'Category', 'Quantity', 'Unit', 'Manufacturer',
            'Batch Number', 'Expiry Date', 'Reorder Level', 'Cost Per Unit',
        ]
        data = [
            [
                p.name, p.category, p.quantity, p.unit, p.manufacturer,
                p.batch_number, p.expiry_date, p.reorder_level, _money(p.cost_per_unit),
            ]
            for p in rows
        ]
    elif report_type == EXPIRY:
        headers = [
            'Product Name', 'Category', 'Quantity', 'Unit', 'Expiry Date',
            'Days Remaining', 'Status', 'Batch Number', 'Manufacturer',
        ]
        data = [
            [
                p.name, p.category, p.quantity, p.unit, p.expiry_date, p.days_to_expiry,
                'Expired' if p.is_expired else 'Expiring Soon', p.batch_number, p.manufacturer,
            ]
            for p in rows
        ]
    else:
        headers = [
            'Product', 'Category', 'Client', 'Client Type', 'Quantity',
            'Unit', 'Assigned By', 'Date', 'Notes',
        ]
        data = [
            [
                a.product_snapshot.get('name', ''),
                a.product_snapshot.get('category', ''),
                a.client_snapshot.get('name', ''),
                a.client_snapshot.get('client_type', ''),
                a.quantity,
                a.product_snapshot.get('unit', ''),
                a.assigned_by.name if a.assigned_by else '',
                a.created_at.date(),
                a.notes,
            ]
            for a in rows
        ]
    return headers, data


def export_filename(report_type: str, extension: str, today: date) -> str:
    return f'{report_type}-report-{today.isoformat()}.{extension}'


def build_report_pdf(report_type: str, rows, today: date) -> bytes:
    c, buf = new_canvas()
    y = draw_header(c, TITLES[report_type], f'Generated on: {fmt_date(today)}')
    headers, data = pdf_table(report_type, rows)
    y = draw_table(c, y, headers, data, PDF_COLUMN_WIDTHS[report_type])
    if not data:
        c.setFont('Helvetica-Oblique', 9)
        c.drawString(LEFT_MARGIN, y, 'No records.')
    return finish(c, buf)


def build_report_xlsx(report_type: str, rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = 'Report'

    headers, data = sheet_table(report_type, rows)
    ws.append(headers)
    for row in data:
        ws.append(row)

    for col in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 18

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()
