"""
Session Provider

Email/password accounts on top of Flask-Login. Passwords are stored as
Werkzeug pbkdf2 hashes; the admin flag is a row in the role-grant table.

With the REST record store the hosted service owns the accounts: sign-in
goes through its auth endpoint, the local user row mirrors the account and
its admin grant, and the hosted access token is kept in the session for the
record store to present.
"""

import hmac
import logging
import secrets

from flask import current_app, session
from flask_login import current_user, login_user, logout_user
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from flower_admin.auth import hosted
from flower_admin.errors import AuthenticationError, RecordStoreError
from flower_admin.extensions import db
from flower_admin.models import APP_ROLES, User, UserRole

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

ACCESS_TOKEN_KEY = 'access_token'
CSRF_TOKEN_KEY = 'csrf_token'


def _normalize_email(email):
    return (email or '').strip().lower()


def uses_hosted_auth():
    return current_app.config.get('RECORD_STORE') == 'rest'


def _start_session(user, access_token=None):
    session.clear()
    login_user(user)
    session[CSRF_TOKEN_KEY] = secrets.token_urlsafe(24)
    if access_token:
        session[ACCESS_TOKEN_KEY] = access_token


def _mirror_hosted_account(email, password, admin):
    """Local row for a hosted account, with the admin grant kept in step."""
    user = User.query.filter_by(email=email).first()
    try:
        if user is None:
            user = User(email=email, password_hash=generate_password_hash(password, method='pbkdf2:sha256'))
            db.session.add(user)
            db.session.flush()
        grant = UserRole.query.filter_by(user_id=user.id, role='admin').first()
        if admin and grant is None:
            db.session.add(UserRole(user_id=user.id, role='admin'))
        elif not admin and grant is not None:
            db.session.delete(grant)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Could not mirror account %s: %s", email, e)
        raise AuthenticationError('An error occurred during sign-in. Please try again.') from e
    return user


def sign_in(email, password):
    """Authenticate and start a session. Raises AuthenticationError."""
    email = _normalize_email(email)
    if not email or not password:
        raise AuthenticationError('Please enter both email and password.')

    access_token = None
    if uses_hosted_auth():
        access_token, hosted_user_id = hosted.request_access_token(email, password)
        admin = hosted.has_admin_grant(access_token, hosted_user_id)
        user = _mirror_hosted_account(email, password, admin)
    else:
        user = User.query.filter_by(email=email).first()
        if user is None or not check_password_hash(user.password_hash, password):
            raise AuthenticationError('Invalid login credentials.')

    _start_session(user, access_token)
    logger.info("User %s signed in", user.email)
    return user


def sign_up(email, password):
    """Create an account without any role grant, then sign it in."""
    email = _normalize_email(email)
    if not email or '@' not in email:
        raise AuthenticationError('Please provide a valid email address.')
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise AuthenticationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters long.')

    if uses_hosted_auth():
        hosted.register_account(email, password)
        logger.info("Hosted account created for %s", email)
        return sign_in(email, password)

    if User.query.filter_by(email=email).first():
        raise AuthenticationError('User already registered.')

    user = User(email=email, password_hash=generate_password_hash(password, method='pbkdf2:sha256'))
    try:
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Sign-up error: %s", e)
        raise AuthenticationError('An error occurred during sign-up. Please try again.') from e

    logger.info("Account created for %s", email)
    return sign_in(email, password)


def sign_out():
    """End the session and drop everything stored in it."""
    logout_user()
    session.clear()


def current_identity():
    """The signed-in user, or None."""
    if current_user and current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def current_access_token():
    """Hosted access token of the session, or None with local accounts."""
    return session.get(ACCESS_TOKEN_KEY)


def csrf_token():
    return session.get(CSRF_TOKEN_KEY, '')


def check_csrf_token(value):
    expected = session.get(CSRF_TOKEN_KEY)
    return bool(expected and value) and hmac.compare_digest(expected, value)


def is_admin(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        return False
    return user.has_role('admin')


def grant_role(user, role='admin'):
    """Give a user a role. Granting an existing role is a no-op."""
    if role not in APP_ROLES:
        raise ValueError(f'Unknown role: {role!r}')
    if user.has_role(role):
        return False
    try:
        db.session.add(UserRole(user_id=user.id, role=role))
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise RecordStoreError(f'Could not grant role {role}') from e
    logger.info("Granted %s role to %s", role, user.email)
    return True
