"""
Error Taxonomy

Exceptions raised by the session provider and the record stores. None of
them is fatal: views turn them into redirects or flashed notifications.
"""


class FlowerAdminError(Exception):
    """Base class for application errors."""


class AuthenticationError(FlowerAdminError):
    """Wrong credentials or an invalid sign-up request."""


class AuthorizationError(FlowerAdminError):
    """The identity is authenticated but holds no admin role grant."""


class RecordStoreError(FlowerAdminError):
    """A read or write against the record store failed."""


class OrderNotFoundError(RecordStoreError):
    """The targeted order no longer exists."""
