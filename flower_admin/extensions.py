"""
Flask Extensions

Admin identities come from Flask-Login; the admin role itself is a row in
the role-grant table and is checked on every request.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for admin sign-in
login_manager = LoginManager()
