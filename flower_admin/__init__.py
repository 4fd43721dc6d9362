"""
Flower Orders Admin - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, redirect, url_for
from flower_admin.extensions import db, login_manager
from flower_admin.config import Config


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = None

    # Register blueprints
    from flower_admin.auth import auth_bp
    from flower_admin.admin import admin_bp

    app.register_blueprint(auth_bp, url_prefix='/admin')
    app.register_blueprint(admin_bp)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from flower_admin.models import User
        return db.session.get(User, int(user_id))

    # The record store refused the identity: end the session and go back to
    # the login page, no details
    from flower_admin.auth.provider import sign_out
    from flower_admin.errors import AuthorizationError

    @app.errorhandler(AuthorizationError)
    def handle_authorization_error(e):
        app.logger.warning("Authorization refused: %s", e)
        sign_out()
        return redirect(url_for('auth.login'))

    # Template filters for dates
    @app.template_filter('short_date')
    def short_date_filter(value, tz=None):
        from flower_admin.services.exports import format_created
        return format_created(value, tz)

    @app.template_filter('long_datetime')
    def long_datetime_filter(value, tz=None):
        from flower_admin.models import as_utc
        from flower_admin.services.exports import format_generated
        value = as_utc(value)
        return format_generated(value.astimezone(tz) if tz else value)

    # Create database tables
    with app.app_context():
        os.makedirs(app.instance_path, exist_ok=True)
        from flower_admin import models  # noqa: F401
        db.create_all()

    return app
