import uuid
from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest
import requests
from werkzeug.security import generate_password_hash

from flower_admin import create_app
from flower_admin.config import TestConfig
from flower_admin.extensions import db
from flower_admin.models import FlowerOrder, User, UserRole


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def _create_user(app, email, password, admin=False):
    with app.app_context():
        user = User(email=email, password_hash=generate_password_hash(password))
        db.session.add(user)
        db.session.commit()
        if admin:
            db.session.add(UserRole(user_id=user.id, role='admin'))
            db.session.commit()
        return user.id


@pytest.fixture()
def admin_user(app):
    user_id = _create_user(app, 'admin@example.com', 'adminpass', admin=True)
    return {'id': user_id, 'email': 'admin@example.com', 'password': 'adminpass'}


@pytest.fixture()
def normal_user(app):
    user_id = _create_user(app, 'normal@example.com', 'normalpass')
    return {'id': user_id, 'email': 'normal@example.com', 'password': 'normalpass'}


@pytest.fixture()
def admin_client(client, admin_user):
    r = client.post('/admin/login', data={'email': admin_user['email'], 'password': admin_user['password']})
    assert r.status_code == 302
    return client


@pytest.fixture()
def make_order():
    """Build a detached FlowerOrder with sensible defaults."""
    counter = {'n': 0}

    def build(**fields):
        counter['n'] += 1
        n = counter['n']
        values = {
            'id': str(uuid.uuid4()),
            'customer_name': f'Customer {n}',
            'email': f'customer{n}@example.com',
            'phone_number': f'98400{n:05d}',
            'pickup_date': date(2026, 10, 20),
            'time_slot': 'Morning',
            'special_requests': None,
            'status': 'Pending',
            'created_at': datetime(2026, 10, 1, 9, 0, tzinfo=timezone.utc),
        }
        values.update(fields)
        return FlowerOrder(**values)

    return build


@pytest.fixture()
def save_orders(app):
    """Persist orders and return their ids."""
    def save(*orders):
        with app.app_context():
            for order in orders:
                db.session.add(order)
            db.session.commit()
            return [o.id for o in orders]
    return save


@pytest.fixture()
def csrf_token(admin_client):
    """Form token issued to the signed-in admin session."""
    with admin_client.session_transaction() as sess:
        return sess['csrf_token']


class StubResponse:

    def __init__(self, status_code=200, payload=None, headers=None):
        self.status_code = status_code
        self._payload = payload if payload is not None else []
        self.headers = headers or {}
        self.text = str(self._payload)

    def json(self):
        return self._payload


@pytest.fixture()
def hosted_service(app, monkeypatch):
    """Switch the app to the REST backend and answer its HTTP calls in memory.

    `accounts` maps email to password, hosted id and admin flag; `calls`
    records (method, url, headers) of every record-store request.
    """
    app.config.update(RECORD_STORE='rest', RECORD_STORE_URL='https://store.example.com',
                      RECORD_STORE_KEY='anon-key')
    accounts = {
        'owner@example.com': {'password': 'flowers1', 'id': 'uuid-owner', 'admin': True},
        'helper@example.com': {'password': 'flowers2', 'id': 'uuid-helper', 'admin': False},
    }
    tokens = {}
    calls = []

    def fake_post(url, params=None, json=None, headers=None, timeout=None):
        if url.endswith('/auth/v1/token'):
            account = accounts.get(json['email'])
            if account is None or account['password'] != json['password']:
                return StubResponse(400, {'error_description': 'Invalid login credentials'})
            token = f"token-{account['id']}"
            tokens[token] = account
            return StubResponse(200, {'access_token': token, 'user': {'id': account['id']}})
        if url.endswith('/auth/v1/signup'):
            if json['email'] in accounts:
                return StubResponse(422, {'msg': 'User already registered'})
            accounts[json['email']] = {'password': json['password'], 'id': f'uuid-{len(accounts)}',
                                       'admin': False}
            return StubResponse(200, {'id': accounts[json['email']]['id']})
        return StubResponse(404, {'message': 'not found'})

    def fake_get(url, params=None, headers=None, timeout=None):
        account = tokens[headers['Authorization'].split(' ', 1)[1]]
        return StubResponse(200, [{'role': 'admin'}] if account['admin'] else [])

    def fake_request(method, url, params=None, json=None, headers=None, timeout=None):
        calls.append((method, url, headers))
        if method == 'HEAD':
            return StubResponse(200, headers={'Content-Range': '*/0'})
        return StubResponse(200, [])

    monkeypatch.setattr(requests, 'post', fake_post)
    monkeypatch.setattr(requests, 'get', fake_get)
    monkeypatch.setattr(requests, 'request', fake_request)
    return SimpleNamespace(accounts=accounts, calls=calls)
