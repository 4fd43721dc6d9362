"""
User and Role Grant Models
"""

from datetime import datetime, timezone

from flask_login import UserMixin

from flower_admin.extensions import db


APP_ROLES = ('admin', 'moderator', 'user')


class User(UserMixin, db.Model):
    """User model for authentication"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    roles = db.relationship('UserRole', backref='user', lazy=True, cascade='all, delete-orphan')

    def has_role(self, role):
        return UserRole.query.filter_by(user_id=self.id, role=role).first() is not None

    def __repr__(self):
        return f'<User {self.email}>'


class UserRole(db.Model):
    """Role grant: one row per (user, role) pair"""
    __tablename__ = 'user_roles'
    __table_args__ = (db.UniqueConstraint('user_id', 'role', name='uq_user_roles_user_role'),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    role = db.Column(db.Enum(*APP_ROLES, name='app_role', validate_strings=True), nullable=False)

    def __repr__(self):
        return f'<UserRole {self.user_id}:{self.role}>'
