"""
Record Store Package

get_record_store() picks the backend configured with RECORD_STORE.
"""

from flask import current_app

from flower_admin.store.base import RecordStore
from flower_admin.store.rest import RestRecordStore
from flower_admin.store.sqlalchemy_store import SQLAlchemyRecordStore

STORE_BACKENDS = {
    'sqlalchemy': SQLAlchemyRecordStore,
    'rest': RestRecordStore,
}


def get_record_store(identity, access_token=None):
    """Build the configured record store for the given identity.

    access_token is the hosted session token; only the REST store uses it.
    """
    backend = current_app.config.get('RECORD_STORE', 'sqlalchemy')
    try:
        store_class = STORE_BACKENDS[backend]
    except KeyError:
        raise ValueError(f'Unknown RECORD_STORE backend: {backend!r}') from None
    return store_class(identity, access_token=access_token)


__all__ = ['RecordStore', 'RestRecordStore', 'SQLAlchemyRecordStore', 'get_record_store']
