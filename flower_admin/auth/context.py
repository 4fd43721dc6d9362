"""
Admin Context

The per-request view of "who is signed in and what may they do". It is
built from the Flask-Login identity after sign-in, handed to every admin
view as its first argument, and gone once sign_out() clears the session.
"""

from flower_admin.auth.provider import current_access_token, current_identity, is_admin
from flower_admin.store import get_record_store


class AdminContext:

    def __init__(self, user, admin=None, access_token=None):
        self.user = user
        self.is_admin = is_admin(user) if admin is None else admin
        self.access_token = access_token
        self._store = None

    @classmethod
    def load(cls):
        """Context for the current request; user is None when signed out."""
        user = current_identity()
        return cls(user, access_token=current_access_token() if user is not None else None)

    @property
    def is_authenticated(self):
        return self.user is not None

    @property
    def email(self):
        return self.user.email if self.user is not None else None

    @property
    def store(self):
        if self._store is None:
            self._store = get_record_store(self.user, access_token=self.access_token)
        return self._store

    def __repr__(self):
        return f'<AdminContext {self.email} admin={self.is_admin}>'
