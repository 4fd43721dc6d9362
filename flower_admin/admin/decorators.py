"""
Admin Decorator

Gate for every /admin view except the login page.
"""

from functools import wraps
from flask import flash, g, redirect, request, url_for

from flower_admin.auth.context import AdminContext
from flower_admin.auth.provider import check_csrf_token


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    - Unauthenticated requests go to the login page with `next` set
    - Authenticated users without the admin grant go to the login page too,
      with no message, so the response does not reveal role information
    - POSTs must carry the session's csrf_token
    - The view receives the AdminContext as its first argument
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        ctx = AdminContext.load()
        if not ctx.is_authenticated:
            return redirect(url_for('auth.login', next=request.path))
        if not ctx.is_admin:
            return redirect(url_for('auth.login'))
        if request.method == 'POST' and not check_csrf_token(request.form.get('csrf_token', '')):
            flash('Your session has expired. Please try again.', 'danger')
            return redirect(url_for('admin.orders'))
        g.admin_context = ctx
        return f(ctx, *args, **kwargs)
    return wrapper
