"""
Configuration settings for the Flower Orders Admin Dashboard
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration (relative sqlite paths resolve inside the instance folder)
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///flower_orders.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Record store backend: 'sqlalchemy' (local database) or 'rest' (hosted PostgREST API)
    RECORD_STORE = os.environ.get('RECORD_STORE') or 'sqlalchemy'
    RECORD_STORE_URL = os.environ.get('RECORD_STORE_URL') or ''
    RECORD_STORE_KEY = os.environ.get('RECORD_STORE_KEY') or ''

    # Application settings
    BUSINESS_NAME = os.environ.get('BUSINESS_NAME') or 'Vinayaka Pooja Flowers'
    DISPLAY_TIMEZONE = os.environ.get('DISPLAY_TIMEZONE') or 'UTC'
    PENDING_POLL_SECONDS = int(os.environ.get('PENDING_POLL_SECONDS') or 30)
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RECORD_STORE = 'sqlalchemy'
