"""Configuration module for Flask application."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')

    # Session Configuration (the inventory screen keeps its cached catalog here)
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    PERMANENT_SESSION_LIFETIME = 86400  # 24 hours

    # Catalog store simulated latency (milliseconds)
    CATALOG_LIST_LATENCY_MS = int(os.getenv('CATALOG_LIST_LATENCY_MS', '150'))
    CATALOG_ADJUST_LATENCY_MS = int(os.getenv('CATALOG_ADJUST_LATENCY_MS', '120'))

    # Receive/issue modal closes this long after a confirm
    MODAL_CLOSE_DELAY_MS = int(os.getenv('MODAL_CLOSE_DELAY_MS', '900'))

    # Error tracking (only used in production)
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestConfig(Config):
    """Configuration used by the test suite."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    WTF_CSRF_ENABLED = False
    SENTRY_DSN = None
    CATALOG_LIST_LATENCY_MS = 0
    CATALOG_ADJUST_LATENCY_MS = 0
    MODAL_CLOSE_DELAY_MS = 0
