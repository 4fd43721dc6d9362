from datetime import date, datetime, timedelta, timezone

from flower_admin.services.dashboard import (
    compute_dashboard, daily_order_series, get_display_timezone, local_today, slot_distribution,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
TODAY = date(2026, 10, 19)


def test_empty_input_gives_fourteen_zero_days():
    stats = compute_dashboard([], now=NOW)
    assert stats['total'] == 0
    assert stats['pending'] == 0
    assert stats['completed'] == 0
    assert stats['todays_pickups'] == 0
    assert len(stats['daily_series']) == 14
    assert [p['orders'] for p in stats['daily_series']] == [0] * 14
    assert stats['slot_distribution'] == [
        {'name': 'Morning', 'value': 0},
        {'name': 'Evening', 'value': 0},
        {'name': 'Night', 'value': 0},
    ]


def test_pending_orders_all_picking_up_today(make_order):
    orders = [make_order(status='Pending', pickup_date=TODAY) for _ in range(3)]
    orders += [make_order(status='Completed', pickup_date=TODAY + timedelta(days=1)) for _ in range(4)]
    orders += [make_order(status='Cancelled', pickup_date=TODAY - timedelta(days=2)) for _ in range(3)]
    orders += [make_order(status='Picked Up', pickup_date=TODAY - timedelta(days=1)) for _ in range(2)]
    assert len(orders) == 12

    stats = compute_dashboard(orders, now=NOW)
    assert stats['total'] == 12
    assert stats['pending'] == 3
    assert stats['completed'] == 4
    assert stats['todays_pickups'] == 3


def test_pending_and_todays_pickups_counted_independently(make_order):
    orders = [make_order(status='Pending', pickup_date=TODAY + timedelta(days=1)) for _ in range(3)]
    orders += [make_order(status='Completed', pickup_date=TODAY) for _ in range(2)]
    orders += [make_order(status='Cancelled', pickup_date=TODAY + timedelta(days=5)) for _ in range(7)]

    stats = compute_dashboard(orders, now=NOW)
    assert stats['total'] == 12
    assert stats['pending'] == 3
    assert stats['completed'] == 2
    assert stats['todays_pickups'] == 2


def test_daily_series_window(make_order):
    at = lambda d, h=10: datetime(d.year, d.month, d.day, h, tzinfo=timezone.utc)  # noqa: E731
    orders = [
        make_order(created_at=at(TODAY)),
        make_order(created_at=at(TODAY, 1)),
        make_order(created_at=at(TODAY - timedelta(days=13))),
        make_order(created_at=at(TODAY - timedelta(days=14))),
        make_order(created_at=at(TODAY - timedelta(days=5))),
    ]
    series = daily_order_series(orders, TODAY, timezone.utc)
    assert len(series) == 14
    assert series[0]['date'] == '2026-10-06'
    assert series[0]['orders'] == 1
    assert series[-1] == {'date': '2026-10-19', 'label': 'Oct 19', 'orders': 2}
    assert series[8]['orders'] == 1
    assert sum(p['orders'] for p in series) == 4


def test_daily_series_uses_display_timezone(make_order):
    tz = get_display_timezone('America/New_York')
    late_evening = make_order(created_at=datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc))

    assert local_today(tz, NOW) == TODAY
    series = daily_order_series([late_evening], local_today(tz, NOW), tz)
    assert series[-2]['date'] == '2026-10-18'
    assert series[-2]['orders'] == 1
    assert series[-1]['orders'] == 0


def test_slot_distribution_fixed_order(make_order):
    orders = [make_order(time_slot='Night'), make_order(time_slot='Morning'),
              make_order(time_slot='Night'), make_order(time_slot='Evening'),
              make_order(time_slot='Night')]
    assert slot_distribution(orders) == [
        {'name': 'Morning', 'value': 1},
        {'name': 'Evening', 'value': 1},
        {'name': 'Night', 'value': 3},
    ]


def test_recomputing_is_idempotent(make_order):
    orders = [make_order(status='Pending', pickup_date=TODAY, time_slot='Evening',
                         created_at=NOW - timedelta(days=2))]
    assert compute_dashboard(orders, now=NOW) == compute_dashboard(orders, now=NOW)


def test_utc_display_timezone():
    assert get_display_timezone('UTC') is timezone.utc
    assert get_display_timezone('') is timezone.utc
