"""
Customer Email Services

Roll orders up into one row per email address, then filter and export.
"""

import io
from datetime import datetime, time

from flower_admin.models import as_utc

MIN_ORDER_CHOICES = ('all', '2', '5', '10')

CSV_HEADER = 'Email,Customer Name,Total Orders,Last Order Date'


def aggregate_customers(orders):
    """One dict per distinct email, in first-seen order.

    `name` follows the order with the latest created_at; on equal
    timestamps the first one seen is kept.
    """
    customers = {}
    for order in orders:
        created = as_utc(order.created_at)
        existing = customers.get(order.email)
        if existing is None:
            customers[order.email] = {
                'email': order.email,
                'name': order.customer_name,
                'count': 1,
                'last_date': created,
            }
            continue
        existing['count'] += 1
        if created > existing['last_date']:
            existing['last_date'] = created
            existing['name'] = order.customer_name
    return list(customers.values())


def parse_min_orders(value):
    if value in (None, '', 'all'):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def filter_customers(customers, search='', min_orders=None, date_from=None, date_to=None, tz=None):
    """Keep rows matching every given criterion.

    date_from/date_to are dates compared against the calendar day of
    last_date in tz (UTC when omitted), the same day customers_csv prints;
    both ends are inclusive.
    """
    q = (search or '').lower()
    lower = datetime.combine(date_from, time.min) if date_from else None
    upper = datetime.combine(date_to, time.max) if date_to else None

    result = []
    for c in customers:
        if q and q not in c['email'].lower() and q not in c['name'].lower():
            continue
        if min_orders is not None and c['count'] < min_orders:
            continue
        last = c['last_date'].astimezone(tz) if tz else c['last_date']
        last = last.replace(tzinfo=None)
        if lower is not None and last < lower:
            continue
        if upper is not None and last > upper:
            continue
        result.append(c)
    return result


def _quote(value):
    return '"' + value.replace('"', '""') + '"'


def customers_csv(customers, tz=None):
    """CSV text for the customer rows, in the order given."""
    output = io.StringIO()
    output.write(CSV_HEADER)
    for c in customers:
        last = c['last_date'].astimezone(tz) if tz else c['last_date']
        output.write('\n')
        output.write(f"{c['email']},{_quote(c['name'])},{c['count']},{last:%Y-%m-%d}")
    return output.getvalue()


def join_emails(customers):
    """Comma-separated email list for the clipboard."""
    return ', '.join(c['email'] for c in customers)
