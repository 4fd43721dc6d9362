"""
Services Package

Exports all services for easy importing.
"""

from flower_admin.services.orders import (
    OrderListState, PAGE_SIZE, apply_order_filters, build_order_page, filter_orders,
    find_order, sort_orders, paginate, page_count,
)
from flower_admin.services.customers import aggregate_customers, filter_customers, customers_csv, join_emails
from flower_admin.services.dashboard import compute_dashboard, get_display_timezone
from flower_admin.services.exports import orders_csv, orders_pdf, format_generated

__all__ = [
    'OrderListState',
    'PAGE_SIZE',
    'apply_order_filters',
    'build_order_page',
    'filter_orders',
    'find_order',
    'sort_orders',
    'paginate',
    'page_count',
    'aggregate_customers',
    'filter_customers',
    'customers_csv',
    'join_emails',
    'compute_dashboard',
    'get_display_timezone',
    'orders_csv',
    'orders_pdf',
    'format_generated',
]
