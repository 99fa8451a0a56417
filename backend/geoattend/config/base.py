"""Settings shared by every environment."""
import os
from datetime import timedelta

class BaseConfig:
    """Base configuration class."""

    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = False

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=12)
    JWT_ALGORITHM = 'HS256'

    # CORS
    CORS_ORIGINS = ["http://localhost:*", "http://127.0.0.1:*"]

    # Rate Limiting
    RATELIMIT_STORAGE_URI = os.getenv('REDIS_URL') or 'memory://'

    # Device sessions: 'sql' uses the device_sessions table, 'redis' uses REDIS_URL
    DEVICE_SESSION_STORE = os.getenv('DEVICE_SESSION_STORE', 'sql')
    DEVICE_SESSION_KEY_PREFIX = 'device_session'
    REDIS_URL = os.getenv('REDIS_URL')

    # Credentials
    MIN_PASSWORD_LENGTH = 6

    # Logging
    LOG_LEVEL = 'INFO'
    LOG_FILE = 'logs/app.log'
