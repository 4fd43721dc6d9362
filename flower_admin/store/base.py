"""
Record Store Interface

Every view reads orders through one of these. Implementations enforce the
admin role themselves: a call made for an identity without the admin grant
raises AuthorizationError instead of returning partial data.
"""

from flower_admin.models import ORDER_STATUSES


class RecordStore:
    """Access to the order table on behalf of one identity."""

    def __init__(self, identity, access_token=None):
        self.identity = identity
        self.access_token = access_token

    def list_orders(self):
        """Return every order, newest first."""
        raise NotImplementedError

    def update_order_status(self, order_id, status):
        raise NotImplementedError

    def delete_order(self, order_id):
        raise NotImplementedError

    def count_pending_orders(self):
        raise NotImplementedError

    def list_order_emails(self):
        """Return (email, customer_name, created_at) rows in insertion order."""
        raise NotImplementedError

    @staticmethod
    def validate_status(status):
        if status not in ORDER_STATUSES:
            raise ValueError(f'Unknown order status: {status!r}')
        return status
