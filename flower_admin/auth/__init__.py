"""
Auth Blueprint

Sign-in, sign-up and sign-out under /admin. The session provider and the
per-request AdminContext live alongside.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from flower_admin.auth import routes  # noqa: E402, F401
