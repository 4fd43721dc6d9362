"""
Order List Services

Search, filter, sort and paginate the full order snapshot in memory.
"""

import math
from datetime import date

from flower_admin.models import ORDER_STATUSES, as_utc

PAGE_SIZE = 10

SORT_FIELDS = ('created_at', 'pickup_date', 'customer_name', 'phone_number', 'time_slot')
SORT_DIRECTIONS = ('asc', 'desc')

_SORT_KEYS = {
    'created_at': lambda o: as_utc(o.created_at),
    'pickup_date': lambda o: o.pickup_date,
    'customer_name': lambda o: o.customer_name.lower(),
    'phone_number': lambda o: o.phone_number,
    'time_slot': lambda o: o.time_slot,
}


class OrderListState:
    """Filter, sort and page settings of the orders view.

    The state round-trips through the query string so that every link
    (sort headers, pagination, exports) fully describes the view.
    """

    def __init__(self, search='', status='all', pickup_date='', sort='created_at',
                 direction='desc', page=0):
        self.search = search or ''
        self.status = status if status in ORDER_STATUSES else 'all'
        self.pickup_date = pickup_date or ''
        self.sort = sort if sort in SORT_FIELDS else 'created_at'
        self.direction = direction if direction in SORT_DIRECTIONS else 'desc'
        self.page = max(0, page or 0)

    @classmethod
    def from_args(cls, args, today=None):
        pickup_date = args.get('pickup_date', '').strip()
        if pickup_date == 'today':
            pickup_date = (today or date.today()).isoformat()
        elif pickup_date:
            try:
                pickup_date = date.fromisoformat(pickup_date).isoformat()
            except ValueError:
                pickup_date = ''
        try:
            page = int(args.get('page', 0))
        except (TypeError, ValueError):
            page = 0
        return cls(
            search=args.get('q', '').strip(),
            status=args.get('status', 'all'),
            pickup_date=pickup_date,
            sort=args.get('sort', 'created_at'),
            direction=args.get('dir', 'desc'),
            page=page,
        )

    def to_args(self, **overrides):
        args = {
            'q': self.search,
            'status': self.status,
            'pickup_date': self.pickup_date,
            'sort': self.sort,
            'dir': self.direction,
            'page': self.page,
        }
        args.update(overrides)
        # Defaults are left out to keep URLs short
        defaults = {'q': '', 'status': 'all', 'pickup_date': '', 'sort': 'created_at',
                    'dir': 'desc', 'page': 0}
        return {k: v for k, v in args.items() if v != defaults[k]}

    def with_filters(self, search=None, status=None, pickup_date=None):
        """Copy with new filter values; any filter change goes back to page 0."""
        return OrderListState(
            search=self.search if search is None else search,
            status=self.status if status is None else status,
            pickup_date=self.pickup_date if pickup_date is None else pickup_date,
            sort=self.sort,
            direction=self.direction,
            page=0,
        )

    def toggle_sort(self, field):
        """Same field flips direction; a new field starts descending."""
        if field == self.sort:
            direction = 'asc' if self.direction == 'desc' else 'desc'
        else:
            direction = 'desc'
        return OrderListState(self.search, self.status, self.pickup_date, field, direction, self.page)

    def with_page(self, page):
        return OrderListState(self.search, self.status, self.pickup_date,
                              self.sort, self.direction, page)

    def __eq__(self, other):
        return isinstance(other, OrderListState) and vars(self) == vars(other)

    def __repr__(self):
        return f'<OrderListState {self.to_args()}>'


def order_matches(order, search='', status='all', pickup_date=''):
    q = search.lower()
    matches_search = (not q
                      or q in order.customer_name.lower()
                      or q in order.email.lower()
                      or search in order.phone_number)
    matches_status = status == 'all' or order.status == status
    matches_date = not pickup_date or order.pickup_date.isoformat() == pickup_date
    return matches_search and matches_status and matches_date


def filter_orders(orders, search='', status='all', pickup_date=''):
    return [o for o in orders if order_matches(o, search, status, pickup_date)]


def sort_orders(orders, field='created_at', direction='desc'):
    """Stable sort; equal keys keep their fetch order in both directions."""
    if field not in _SORT_KEYS:
        raise ValueError(f'Unknown sort field: {field!r}')
    return sorted(orders, key=_SORT_KEYS[field], reverse=(direction == 'desc'))


def paginate(items, page, page_size=PAGE_SIZE):
    start = page * page_size
    return items[start:start + page_size]


def page_count(total, page_size=PAGE_SIZE):
    return math.ceil(total / page_size)


def apply_order_filters(orders, state):
    """Filtered and sorted orders for a state, before pagination.

    Exports use this so they match the on-screen set exactly.
    """
    filtered = filter_orders(orders, state.search, state.status, state.pickup_date)
    return sort_orders(filtered, state.sort, state.direction)


def build_order_page(orders, state):
    """Run the full pipeline and return the page plus counts for the view."""
    ordered = apply_order_filters(orders, state)
    total = len(ordered)
    items = paginate(ordered, state.page)
    first = state.page * PAGE_SIZE + 1 if items else 0
    return {
        'orders': items,
        'total': total,
        'pages': page_count(total),
        'page': state.page,
        'first': first,
        'last': first + len(items) - 1 if items else 0,
    }


def find_order(orders, order_id):
    return next((o for o in orders if str(o.id) == str(order_id)), None)
