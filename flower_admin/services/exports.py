"""
Export Services

Render an already filtered and sorted order list as CSV or PDF. Rows are
written in the order given; nothing here filters or sorts.
"""

import csv
import io

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from flower_admin.models import as_utc

ORDER_COLUMNS = ['Customer', 'Email', 'Phone', 'Pickup Date', 'Slot', 'Status', 'Created']

# x offsets (points) of each PDF column on an A4 page
PDF_COLUMN_X = [40, 130, 265, 345, 410, 455, 510]
PDF_COLUMN_CHARS = [16, 24, 14, 11, 8, 10, 14]


def format_generated(moment):
    """Header timestamp, e.g. 'Oct 19, 2026, 9:05:00 AM'."""
    hour = moment.hour % 12 or 12
    return f"{moment:%b} {moment.day}, {moment.year}, {hour}:{moment:%M:%S %p}"


def format_created(value, tz=None):
    value = as_utc(value)
    if tz is not None:
        value = value.astimezone(tz)
    return f"{value:%b} {value.day}, {value.year}"


def order_row(order, tz=None):
    return [
        order.customer_name,
        order.email,
        order.phone_number,
        order.pickup_date.isoformat(),
        order.time_slot,
        order.status,
        format_created(order.created_at, tz),
    ]


def header_lines(count, generated_at):
    return [f"Generated: {format_generated(generated_at)}", f"{count} orders"]


def orders_csv(orders, tz=None):
    output = io.StringIO()
    writer = csv.writer(output, lineterminator='\n')
    writer.writerow(ORDER_COLUMNS)
    for order in orders:
        writer.writerow(order_row(order, tz))
    return output.getvalue()


def _clip(text, limit):
    return text if len(text) <= limit else text[:limit - 1] + '…'


def orders_pdf(orders, generated_at, title, tz=None):
    """Build the orders PDF and return its bytes.

    Title block on the first page, the column header repeated on every page.
    """
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    def draw_column_header(y):
        c.setFillColorRGB(0.85, 0.47, 0.02)
        c.rect(35, y - 4, width - 70, 16, stroke=0, fill=1)
        c.setFillColorRGB(1, 1, 1)
        c.setFont("Helvetica-Bold", 8)
        for x, label in zip(PDF_COLUMN_X, ORDER_COLUMNS):
            c.drawString(x, y, label)
        c.setFillColorRGB(0, 0, 0)
        return y - 18

    y = height - 50
    c.setFont("Helvetica-Bold", 16)
    c.drawString(40, y, title)
    y -= 20
    c.setFont("Helvetica", 10)
    for line in header_lines(len(orders), generated_at):
        c.drawString(40, y, line)
        y -= 14
    y -= 8
    y = draw_column_header(y)

    c.setFont("Helvetica", 8)
    for order in orders:
        if y < 50:
            c.showPage()
            y = draw_column_header(height - 50)
            c.setFont("Helvetica", 8)
        for x, limit, value in zip(PDF_COLUMN_X, PDF_COLUMN_CHARS, order_row(order, tz)):
            c.drawString(x, y, _clip(value, limit))
        y -= 14

    c.showPage()
    c.save()
    return buffer.getvalue()
