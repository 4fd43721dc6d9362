"""
Hosted Auth Client

Used when RECORD_STORE is 'rest'. Accounts live with the hosted service:
sign-in exchanges email and password for an access token, and the admin
grant is read from its `user_roles` table with that token. The token is what
the REST record store later presents, so the hosted row-level policies see
the signed-in user rather than the anonymous key.
"""

import logging

import requests
from flask import current_app

from flower_admin.errors import AuthenticationError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10


def _base_url():
    return current_app.config['RECORD_STORE_URL'].rstrip('/')


def _headers(token=None):
    api_key = current_app.config['RECORD_STORE_KEY']
    headers = {'apikey': api_key, 'Accept': 'application/json'}
    if token:
        headers['Authorization'] = f'Bearer {token}'
    return headers


def _error_message(resp):
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get('error_description') or body.get('msg') or body.get('message')


def _post(path, params=None, payload=None):
    try:
        return requests.post(f'{_base_url()}{path}', params=params, json=payload,
                             headers=_headers(), timeout=REQUEST_TIMEOUT)
    except requests.exceptions.Timeout as e:
        logger.error("Hosted auth %s timed out", path)
        raise AuthenticationError('The sign-in service did not respond. Please try again.') from e
    except requests.exceptions.RequestException as e:
        logger.error("Hosted auth %s failed: %s", path, e)
        raise AuthenticationError('Could not reach the sign-in service. Please try again.') from e


def request_access_token(email, password):
    """Password grant. Returns (access_token, hosted_user_id)."""
    resp = _post('/auth/v1/token', params={'grant_type': 'password'},
                 payload={'email': email, 'password': password})
    if resp.status_code in (400, 401):
        raise AuthenticationError('Invalid login credentials.')
    if resp.status_code >= 400:
        logger.error("Hosted sign-in error %s", resp.status_code)
        raise AuthenticationError('An error occurred during sign-in. Please try again.')

    body = resp.json()
    return body['access_token'], body['user']['id']


def register_account(email, password):
    """Create the hosted account; the caller signs in afterwards."""
    resp = _post('/auth/v1/signup', payload={'email': email, 'password': password})
    if resp.status_code >= 400:
        message = _error_message(resp) or 'An error occurred during sign-up. Please try again.'
        raise AuthenticationError(message)


def has_admin_grant(access_token, hosted_user_id):
    """Read the caller's own admin row with its access token."""
    try:
        resp = requests.get(f'{_base_url()}/rest/v1/user_roles',
                            params={'select': 'role', 'user_id': f'eq.{hosted_user_id}',
                                    'role': 'eq.admin'},
                            headers=_headers(access_token), timeout=REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.error("Role lookup failed: %s", e)
        raise AuthenticationError('Could not verify account access. Please try again.') from e
    if resp.status_code >= 400:
        logger.error("Role lookup error %s", resp.status_code)
        raise AuthenticationError('Could not verify account access. Please try again.')
    return bool(resp.json())
