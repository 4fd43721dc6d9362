"""
Admin Routes

Every view works on a fresh snapshot fetched from the record store for the
signed-in admin. Read failures render empty data with a notification; write
failures only flash a notification.
"""

import logging
from datetime import date, datetime

from flask import (current_app, flash, g, jsonify, make_response, redirect, render_template,
                   request, Response, url_for)

from flower_admin.admin import admin_bp
from flower_admin.admin.decorators import admin_required
from flower_admin.auth.provider import csrf_token
from flower_admin.errors import OrderNotFoundError, RecordStoreError
from flower_admin.models import ORDER_STATUSES, TIME_SLOTS
from flower_admin.services import (
    OrderListState, aggregate_customers, apply_order_filters, build_order_page,
    compute_dashboard, customers_csv, filter_customers, find_order, get_display_timezone,
    join_emails, orders_csv, orders_pdf,
)
from flower_admin.services.customers import MIN_ORDER_CHOICES, parse_min_orders
from flower_admin.services.dashboard import local_today
from flower_admin.services.exports import format_generated

logger = logging.getLogger(__name__)


def _display_tz():
    return get_display_timezone(current_app.config.get('DISPLAY_TIMEZONE'))


def _load_orders(ctx):
    try:
        return ctx.store.list_orders()
    except RecordStoreError as e:
        logger.error("Could not load orders: %s", e)
        flash('Could not load orders. Please try again.', 'danger')
        return []


def _list_state():
    return OrderListState.from_args(request.args, today=local_today(_display_tz()))


def _back_to_orders():
    next_page = request.form.get('next', '')
    if next_page.startswith('/admin/orders') and not next_page.startswith('//'):
        return redirect(next_page)
    return redirect(url_for('admin.orders'))


def _parse_date(value):
    try:
        return date.fromisoformat(value) if value else None
    except ValueError:
        return None


@admin_bp.context_processor
def inject_admin_header():
    """Signed-in email and pending badge for the layout."""
    ctx = g.get('admin_context')
    if ctx is None:
        return {}
    try:
        pending_count = ctx.store.count_pending_orders()
    except RecordStoreError as e:
        logger.warning("Pending count unavailable: %s", e)
        pending_count = None
    return dict(
        admin_email=ctx.email,
        csrf_token=csrf_token(),
        pending_count=pending_count,
        pending_poll_seconds=current_app.config['PENDING_POLL_SECONDS'],
        business_name=current_app.config['BUSINESS_NAME'],
        today_label=datetime.now(_display_tz()).strftime('%A, %B %d, %Y'),
    )


@admin_bp.route('/')
def index():
    return redirect(url_for('admin.dashboard'))


@admin_bp.route('/admin')
@admin_bp.route('/admin/dashboard')
@admin_required
def dashboard(ctx):
    """Summary cards and charts."""
    orders = _load_orders(ctx)
    stats = compute_dashboard(orders, tz=_display_tz())
    return render_template('admin/dashboard.html', stats=stats)


@admin_bp.route('/admin/orders')
@admin_required
def orders(ctx):
    """Searchable, sortable, paginated order table."""
    state = _list_state()
    result = build_order_page(_load_orders(ctx), state)
    return render_template('admin/orders.html', state=state, result=result,
                           statuses=ORDER_STATUSES, time_slots=TIME_SLOTS, tz=_display_tz())


@admin_bp.route('/admin/orders/<order_id>')
@admin_required
def order_detail(ctx, order_id):
    order = find_order(_load_orders(ctx), order_id)
    if order is None:
        flash('Order not found.', 'warning')
        return redirect(url_for('admin.orders'))
    return render_template('admin/order_detail.html', order=order, tz=_display_tz())


@admin_bp.route('/admin/orders/<order_id>/status', methods=['POST'])
@admin_required
def update_status(ctx, order_id):
    """Set an order's status; any status may follow any other."""
    status = request.form.get('status', '')
    if status not in ORDER_STATUSES:
        flash('Unknown status.', 'danger')
        return _back_to_orders()
    try:
        ctx.store.update_order_status(order_id, status)
        flash('Status updated', 'success')
    except OrderNotFoundError:
        flash('Order not found.', 'danger')
    except RecordStoreError as e:
        logger.error("Status update failed for %s: %s", order_id, e)
        flash('Could not update status. Please try again.', 'danger')
    return _back_to_orders()


@admin_bp.route('/admin/orders/<order_id>/delete', methods=['GET', 'POST'])
@admin_required
def delete_order(ctx, order_id):
    """Confirmation page on GET; deletion only on POST with confirm=yes."""
    if request.method == 'GET':
        order = find_order(_load_orders(ctx), order_id)
        if order is None:
            flash('Order not found.', 'warning')
            return redirect(url_for('admin.orders'))
        return render_template('admin/order_delete.html', order=order,
                               next=request.args.get('next', ''))

    if request.form.get('confirm') != 'yes':
        flash('Deletion cancelled.', 'info')
        return _back_to_orders()
    try:
        ctx.store.delete_order(order_id)
        flash('Order deleted', 'success')
    except OrderNotFoundError:
        flash('Order not found.', 'danger')
    except RecordStoreError as e:
        logger.error("Delete failed for %s: %s", order_id, e)
        flash('Could not delete order. Please try again.', 'danger')
    return _back_to_orders()


@admin_bp.route('/admin/orders/export.pdf')
@admin_required
def export_orders_pdf(ctx):
    tz = _display_tz()
    ordered = apply_order_filters(_load_orders(ctx), _list_state())
    pdf = orders_pdf(ordered, datetime.now(tz), current_app.config['BUSINESS_NAME'], tz=tz)
    response = make_response(pdf)
    response.headers['Content-Type'] = 'application/pdf'
    response.headers['Content-Disposition'] = 'attachment; filename=vinayaka-orders.pdf'
    return response


@admin_bp.route('/admin/orders/export.csv')
@admin_required
def export_orders_csv(ctx):
    ordered = apply_order_filters(_load_orders(ctx), _list_state())
    response = Response(orders_csv(ordered, tz=_display_tz()), mimetype='text/csv')
    response.headers['Content-Disposition'] = 'attachment; filename=vinayaka-orders.csv'
    return response


@admin_bp.route('/admin/orders/print')
@admin_required
def print_orders(ctx):
    tz = _display_tz()
    ordered = apply_order_filters(_load_orders(ctx), _list_state())
    return render_template('admin/orders_print.html', orders=ordered, tz=tz,
                           generated=format_generated(datetime.now(tz)))


def _customer_view(ctx):
    """Aggregated, filtered customer rows plus the filter values used."""
    filters = {
        'q': request.args.get('q', '').strip(),
        'min_orders': request.args.get('min_orders', 'all'),
        'date_from': request.args.get('date_from', ''),
        'date_to': request.args.get('date_to', ''),
    }
    if filters['min_orders'] not in MIN_ORDER_CHOICES:
        filters['min_orders'] = 'all'

    try:
        rows = ctx.store.list_order_emails()
    except RecordStoreError as e:
        logger.error("Could not load customer emails: %s", e)
        flash('Could not load customers. Please try again.', 'danger')
        rows = []

    customers = filter_customers(
        aggregate_customers(rows),
        search=filters['q'],
        min_orders=parse_min_orders(filters['min_orders']),
        date_from=_parse_date(filters['date_from']),
        date_to=_parse_date(filters['date_to']),
        tz=_display_tz(),
    )
    return customers, filters


@admin_bp.route('/admin/emails')
@admin_required
def emails(ctx):
    """One row per customer email."""
    customers, filters = _customer_view(ctx)
    return render_template('admin/emails.html', customers=customers, filters=filters,
                           min_order_choices=MIN_ORDER_CHOICES, tz=_display_tz())


@admin_bp.route('/admin/emails/export.csv')
@admin_required
def export_emails_csv(ctx):
    customers, _ = _customer_view(ctx)
    response = Response(customers_csv(customers, tz=_display_tz()), mimetype='text/csv')
    response.headers['Content-Disposition'] = 'attachment; filename=customer-emails.csv'
    return response


@admin_bp.route('/admin/emails/copy')
@admin_required
def copy_emails(ctx):
    """Joined email list; the page puts it on the clipboard."""
    customers, _ = _customer_view(ctx)
    return jsonify({'success': True, 'count': len(customers), 'emails': join_emails(customers)})


@admin_bp.route('/admin/api/pending-count')
@admin_required
def api_pending_count(ctx):
    """Polled by the layout to refresh the pending badge."""
    try:
        count = ctx.store.count_pending_orders()
    except RecordStoreError as e:
        return jsonify({'success': False, 'error': str(e)}), 503
    return jsonify({'success': True, 'count': count})
