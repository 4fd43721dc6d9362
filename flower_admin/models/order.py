"""
Flower Order Model
"""

import uuid
from collections import namedtuple
from datetime import date, datetime, timezone

from flower_admin.extensions import db


ORDER_STATUSES = ('Pending', 'Completed', 'Cancelled', 'Picked Up')
TIME_SLOTS = ('Morning', 'Evening', 'Night')

# Light row returned by RecordStore.list_order_emails()
OrderEmail = namedtuple('OrderEmail', ['email', 'customer_name', 'created_at'])


def _utcnow():
    return datetime.now(timezone.utc)


def as_utc(value):
    """Return an aware UTC datetime; naive values (sqlite) are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value):
    """Parse an ISO-8601 timestamp as serialized by the hosted store."""
    if isinstance(value, datetime):
        return as_utc(value)
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return as_utc(datetime.fromisoformat(value))


class FlowerOrder(db.Model):
    """A flower pickup order placed by a customer"""
    __tablename__ = 'flower_orders'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    customer_name = db.Column(db.Text, nullable=False)
    email = db.Column(db.Text, nullable=False, index=True)
    phone_number = db.Column(db.Text, nullable=False)
    pickup_date = db.Column(db.Date, nullable=False, index=True)
    time_slot = db.Column(db.Enum(*TIME_SLOTS, name='time_slot', validate_strings=True),
                          nullable=False, default='Morning')
    special_requests = db.Column(db.Text)
    status = db.Column(db.Enum(*ORDER_STATUSES, name='order_status', validate_strings=True),
                       nullable=False, default='Pending', index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)

    @classmethod
    def from_dict(cls, row):
        """Build a detached order from a JSON row."""
        pickup = row['pickup_date']
        return cls(
            id=row['id'],
            customer_name=row['customer_name'],
            email=row['email'],
            phone_number=row['phone_number'],
            pickup_date=pickup if isinstance(pickup, date) else date.fromisoformat(pickup),
            time_slot=row.get('time_slot') or 'Morning',
            special_requests=row.get('special_requests'),
            status=row.get('status') or 'Pending',
            created_at=parse_timestamp(row['created_at']),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'customer_name': self.customer_name,
            'email': self.email,
            'phone_number': self.phone_number,
            'pickup_date': self.pickup_date.isoformat(),
            'time_slot': self.time_slot,
            'special_requests': self.special_requests,
            'status': self.status,
            'created_at': as_utc(self.created_at).isoformat(),
        }

    def __repr__(self):
        return f'<FlowerOrder {self.id} {self.customer_name} {self.status}>'
