"""
Auth Routes

Admin sign-in, sign-up and sign-out.
"""

from flask import render_template, request, redirect, url_for, flash
from flower_admin.auth import auth_bp
from flower_admin.auth.context import AdminContext
from flower_admin.auth.provider import sign_in, sign_up, sign_out
from flower_admin.errors import AuthenticationError


def _safe_next(next_page):
    if next_page and next_page.startswith('/') and not next_page.startswith('//'):
        return next_page
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page; `mode=signup` switches the form to account creation."""
    ctx = AdminContext.load()
    if ctx.is_authenticated and ctx.is_admin:
        return redirect(url_for('admin.dashboard'))

    mode = request.values.get('mode', 'signin')
    if mode not in ('signin', 'signup'):
        mode = 'signin'
    error = None

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')
        try:
            if mode == 'signup':
                sign_up(email, password)
                flash('Account created!', 'success')
            else:
                sign_in(email, password)
        except AuthenticationError as e:
            error = str(e)
        else:
            next_page = _safe_next(request.args.get('next'))
            return redirect(next_page or url_for('admin.dashboard'))

    return render_template('admin/login.html', mode=mode, error=error,
                           email=request.form.get('email', ''))


@auth_bp.route('/logout')
def logout():
    """Sign out and clear the session."""
    sign_out()
    flash('You have been logged out.', 'info')
    return redirect(url_for('auth.login'))
