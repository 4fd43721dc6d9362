"""
REST Record Store

Talks to a hosted PostgREST-style API exposing the `flower_orders` table.
Every call carries the access token of the signed-in user, so the server's
row-level policies judge that user. A 401 or 403 answer (for instance an
expired token) is reported as AuthorizationError. Rows hidden by a policy
come back as an empty answer rather than an error, so the admin grant
mirrored at sign-in is also checked before each call.
"""

import logging

import requests
from flask import current_app

from flower_admin.errors import AuthorizationError, OrderNotFoundError, RecordStoreError
from flower_admin.models import FlowerOrder, OrderEmail
from flower_admin.models.order import parse_timestamp
from flower_admin.store.base import RecordStore

logger = logging.getLogger(__name__)

ORDERS_TABLE = 'flower_orders'
REQUEST_TIMEOUT = 10


class RestRecordStore(RecordStore):

    def __init__(self, identity, access_token=None, base_url=None, api_key=None):
        super().__init__(identity, access_token)
        self.base_url = (base_url or current_app.config['RECORD_STORE_URL']).rstrip('/')
        self.api_key = api_key or current_app.config['RECORD_STORE_KEY']

    def _headers(self, **extra):
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.access_token}',
            'Accept': 'application/json',
        }
        headers.update(extra)
        return headers

    def _request(self, method, params=None, json=None, headers=None):
        identity = self.identity
        if identity is None or not getattr(identity, 'is_authenticated', False) or not self.access_token:
            raise AuthorizationError('Authentication required')
        if not identity.has_role('admin'):
            raise AuthorizationError('Admin role required')

        url = f'{self.base_url}/rest/v1/{ORDERS_TABLE}'
        try:
            resp = requests.request(method, url, params=params, json=json,
                                    headers=headers or self._headers(), timeout=REQUEST_TIMEOUT)
        except requests.exceptions.Timeout as e:
            logger.error("Record store %s timed out", method)
            raise RecordStoreError('Request timed out') from e
        except requests.exceptions.RequestException as e:
            logger.error("Record store %s failed: %s", method, e)
            raise RecordStoreError(str(e)) from e

        if resp.status_code in (401, 403):
            raise AuthorizationError('Admin role required')
        if resp.status_code >= 400:
            logger.error("Record store %s error %s: %s", method, resp.status_code, resp.text[:200])
            raise RecordStoreError(f'Record store error {resp.status_code}')
        return resp

    def list_orders(self):
        resp = self._request('GET', params={'select': '*', 'order': 'created_at.desc'})
        return [FlowerOrder.from_dict(row) for row in resp.json()]

    def update_order_status(self, order_id, status):
        self.validate_status(status)
        resp = self._request('PATCH', params={'id': f'eq.{order_id}'}, json={'status': status},
                             headers=self._headers(Prefer='return=representation'))
        if not resp.json():
            raise OrderNotFoundError(f'Order {order_id} not found')
        logger.info("Order %s status set to %s", order_id, status)

    def delete_order(self, order_id):
        resp = self._request('DELETE', params={'id': f'eq.{order_id}'},
                             headers=self._headers(Prefer='return=representation'))
        if not resp.json():
            raise OrderNotFoundError(f'Order {order_id} not found')
        logger.info("Order %s deleted", order_id)

    def count_pending_orders(self):
        resp = self._request('HEAD', params={'select': '*', 'status': 'eq.Pending'},
                             headers=self._headers(Prefer='count=exact'))
        # Content-Range looks like "0-4/5" or "*/0"
        content_range = resp.headers.get('Content-Range', '')
        try:
            return int(content_range.rsplit('/', 1)[1])
        except (IndexError, ValueError) as e:
            raise RecordStoreError(f'Unexpected Content-Range: {content_range!r}') from e

    def list_order_emails(self):
        resp = self._request('GET', params={'select': 'email,customer_name,created_at',
                                            'order': 'created_at.asc'})
        return [OrderEmail(row['email'], row['customer_name'], parse_timestamp(row['created_at']))
                for row in resp.json()]
