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
    TESTING = False

    # Database - Support multiple environment variable naming conventions
    # Priority: DATABASE_URL > DB_* > POSTGRES_*
    DATABASE_URL = os.getenv('DATABASE_URL')

    if not DATABASE_URL:
        # Try DB_* variables (Docker style)
        DB_HOST = os.getenv('DB_HOST') or os.getenv('POSTGRES_HOST', 'localhost')
        DB_PORT = os.getenv('DB_PORT') or os.getenv('POSTGRES_PORT', '5432')
        DB_NAME = os.getenv('DB_NAME') or os.getenv('POSTGRES_DB', 'pos')
        DB_USER = os.getenv('DB_USER') or os.getenv('POSTGRES_USER', 'pos')
        DB_PASSWORD = os.getenv('DB_PASSWORD') or os.getenv('POSTGRES_PASSWORD', 'pos')

        DATABASE_URL = (
            f"postgresql://{DB_USER}:{DB_PASSWORD}"
            f"@{DB_HOST}:{DB_PORT}/{DB_NAME}"
        )

    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = DATABASE_URL
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'
    SQLALCHEMY_POOL_SIZE = int(os.getenv('SQLALCHEMY_POOL_SIZE', '10'))
    SQLALCHEMY_MAX_OVERFLOW = int(os.getenv('SQLALCHEMY_MAX_OVERFLOW', '20'))

    # Session tokens issued by GET /token
    TOKEN_TTL_HOURS = int(os.getenv('TOKEN_TTL_HOURS', '4'))
    GOOGLE_USERINFO_URL = os.getenv(
        'GOOGLE_USERINFO_URL',
        'https://www.googleapis.com/oauth2/v1/userinfo'
    )
    GOOGLE_USERINFO_TIMEOUT = int(os.getenv('GOOGLE_USERINFO_TIMEOUT', '10'))

    # Checkout
    # True keeps the historical behavior: stock may go below zero.
    STOCK_ALLOW_NEGATIVE = os.getenv('STOCK_ALLOW_NEGATIVE', 'true').lower() == 'true'
    ORDER_NUMBER_PREFIX = os.getenv('ORDER_NUMBER_PREFIX', 'TRJ')

    # CORS
    CORS_ALLOWED_ORIGINS = os.getenv('CORS_ALLOWED_ORIGINS', '*')
    CORS_ALLOWED_METHODS = 'GET, POST, PUT, DELETE, OPTIONS'
    CORS_ALLOWED_HEADERS = 'Content-Type, Authorization, Token'
    CORS_MAX_AGE = int(os.getenv('CORS_MAX_AGE', '86400'))


class TestConfig(Config):
    """In-memory SQLite configuration for the test suite."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_ECHO = False
    STOCK_ALLOW_NEGATIVE = True
