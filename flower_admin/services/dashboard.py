"""
Dashboard Services

Summary counts and chart series for the admin dashboard.
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from flower_admin.models import TIME_SLOTS, as_utc

SERIES_DAYS = 14


def get_display_timezone(name):
    return ZoneInfo(name) if name and name != 'UTC' else timezone.utc


def local_today(tz, now=None):
    now = now or datetime.now(timezone.utc)
    return as_utc(now).astimezone(tz).date()


def daily_order_series(orders, today, tz, days=SERIES_DAYS):
    """Orders created per calendar day, oldest first, always `days` long."""
    counts = {}
    for o in orders:
        day = as_utc(o.created_at).astimezone(tz).date()
        counts[day] = counts.get(day, 0) + 1

    series = []
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        series.append({
            'date': day.isoformat(),
            'label': f'{day:%b} {day.day}',
            'orders': counts.get(day, 0),
        })
    return series


def slot_distribution(orders):
    return [{'name': slot, 'value': sum(1 for o in orders if o.time_slot == slot)}
            for slot in TIME_SLOTS]


def compute_dashboard(orders, tz=timezone.utc, now=None):
    """Compute every dashboard figure from one order snapshot.

    Args:
        orders: the full order list
        tz: timezone that defines "today" and calendar days
        now: reference instant (defaults to the current time)

    Returns:
        dict with total, pending, completed, todays_pickups, today,
        daily_series and slot_distribution
    """
    today = local_today(tz, now)
    return {
        'total': len(orders),
        'pending': sum(1 for o in orders if o.status == 'Pending'),
        'completed': sum(1 for o in orders if o.status == 'Completed'),
        'todays_pickups': sum(1 for o in orders if o.pickup_date == today),
        'today': today,
        'daily_series': daily_order_series(orders, today, tz),
        'slot_distribution': slot_distribution(orders),
    }
