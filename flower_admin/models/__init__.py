"""
Models Package

Exports all models for easy importing.
"""

from flower_admin.models.order import FlowerOrder, OrderEmail, ORDER_STATUSES, TIME_SLOTS, as_utc
from flower_admin.models.user import User, UserRole, APP_ROLES

__all__ = [
    'FlowerOrder',
    'OrderEmail',
    'ORDER_STATUSES',
    'TIME_SLOTS',
    'as_utc',
    'User',
    'UserRole',
    'APP_ROLES',
]
