"""
Core — PDF Drawing Helpers

Canvas primitives shared by the invoice and report PDFs: an A4 canvas
backed by an in-memory buffer, a page header and a plain table that
continues onto new pages.

@file core/pdf.py
"""

from collections.abc import Iterable, Sequence
from datetime import date, datetime
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

LEFT_MARGIN = 18 * mm
BOTTOM_MARGIN = 25 * mm
LINE_HEIGHT = 4 * mm
APP_TITLE = 'MedStock'


def fmt_date(value: Any) -> str:
    if not value:
        return ''
    if isinstance(value, datetime):
        return value.strftime('%d-%m-%Y %H:%M')
    if isinstance(value, date):
        return value.strftime('%d-%m-%Y')
    return str(value)


def new_canvas() -> tuple[canvas.Canvas, BytesIO]:
    buf = BytesIO()
    return canvas.Canvas(buf, pagesize=A4), buf


def draw_header(c: canvas.Canvas, title: str, subtitle: str = '') -> float:
    """Draw the page header and return the y position below it."""
    width, height = A4
    y = height - 20 * mm

    c.setFont('Helvetica-Bold', 14)
    c.drawString(LEFT_MARGIN, y, APP_TITLE)

    y -= 7 * mm
    c.setFont('Helvetica-Bold', 12)
    c.drawString(LEFT_MARGIN, y, title)

    if subtitle:
        y -= 5 * mm
        c.setFont('Helvetica', 10)
        c.drawString(LEFT_MARGIN, y, subtitle)

    y -= 4 * mm
    c.setStrokeColor(colors.grey)
    c.setLineWidth(0.6)
    c.line(LEFT_MARGIN, y, width - LEFT_MARGIN, y)
    return y - 6 * mm


def _table_header(c, y, headers, offsets, total_width) -> float:
    c.setFont('Helvetica-Bold', 9)
    for offset, text in zip(offsets, headers):
        c.drawString(LEFT_MARGIN + offset, y, text)
    y -= LINE_HEIGHT
    c.setLineWidth(0.4)
    c.line(LEFT_MARGIN, y, LEFT_MARGIN + total_width, y)
    c.setFont('Helvetica', 9)
    return y - 5 * mm


def draw_table(
    c: canvas.Canvas,
    y: float,
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    col_widths_mm: Sequence[float],
) -> float:
    """Draw rows under a header line, starting a new page when the bottom is reached."""
    widths = [w * mm for w in col_widths_mm]
    offsets = [sum(widths[:i]) for i in range(len(widths))]
    total_width = sum(widths)

    y = _table_header(c, y, headers, offsets, total_width)
    for row in rows:
        if y < BOTTOM_MARGIN:
            c.showPage()
            y = draw_header(c, 'Continued')
            y = _table_header(c, y, headers, offsets, total_width)
        for offset, cell in zip(offsets, row):
            c.drawString(LEFT_MARGIN + offset, y, str(cell if cell is not None else '')[:60])
        y -= LINE_HEIGHT
    return y


def finish(c: canvas.Canvas, buf: BytesIO) -> bytes:
    c.showPage()
    c.save()
    return buf.getvalue()
