"""
SQLAlchemy Record Store

Orders and role grants live in the application database. The admin role
check runs before every call, mirroring a row-level policy.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from flower_admin.errors import AuthorizationError, OrderNotFoundError, RecordStoreError
from flower_admin.extensions import db
from flower_admin.models import FlowerOrder, OrderEmail, UserRole
from flower_admin.store.base import RecordStore

logger = logging.getLogger(__name__)


class SQLAlchemyRecordStore(RecordStore):

    def _require_admin(self):
        identity = self.identity
        if identity is None or not getattr(identity, 'is_authenticated', False):
            raise AuthorizationError('Authentication required')
        try:
            granted = db.session.query(UserRole.id)\
                .filter_by(user_id=identity.id, role='admin').first()
        except SQLAlchemyError as e:
            raise RecordStoreError(f'Could not check role grant: {e}') from e
        if granted is None:
            raise AuthorizationError('Admin role required')

    def list_orders(self):
        self._require_admin()
        try:
            return FlowerOrder.query.order_by(FlowerOrder.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error("Error listing orders: %s", e)
            raise RecordStoreError('Could not load orders') from e

    def update_order_status(self, order_id, status):
        self.validate_status(status)
        self._require_admin()
        try:
            order = db.session.get(FlowerOrder, order_id)
            if order is None:
                raise OrderNotFoundError(f'Order {order_id} not found')
            order.status = status
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Error updating order %s: %s", order_id, e)
            raise RecordStoreError('Could not update order status') from e
        logger.info("Order %s status set to %s", order_id, status)

    def delete_order(self, order_id):
        self._require_admin()
        try:
            order = db.session.get(FlowerOrder, order_id)
            if order is None:
                raise OrderNotFoundError(f'Order {order_id} not found')
            db.session.delete(order)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error("Error deleting order %s: %s", order_id, e)
            raise RecordStoreError('Could not delete order') from e
        logger.info("Order %s deleted", order_id)

    def count_pending_orders(self):
        self._require_admin()
        try:
            return FlowerOrder.query.filter_by(status='Pending').count()
        except SQLAlchemyError as e:
            logger.error("Error counting pending orders: %s", e)
            raise RecordStoreError('Could not count pending orders') from e

    def list_order_emails(self):
        self._require_admin()
        try:
            rows = db.session.query(FlowerOrder.email, FlowerOrder.customer_name, FlowerOrder.created_at)\
                .order_by(FlowerOrder.created_at.asc()).all()
        except SQLAlchemyError as e:
            logger.error("Error listing order emails: %s", e)
            raise RecordStoreError('Could not load customer emails') from e
        return [OrderEmail(email, name, created_at) for email, name, created_at in rows]
