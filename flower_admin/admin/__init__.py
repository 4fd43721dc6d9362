"""
Admin Blueprint

Dashboard, orders and customer-email views. Every view is wrapped in
admin_required and receives the AdminContext.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from flower_admin.admin import routes  # noqa: E402, F401
