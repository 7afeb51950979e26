"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Database Settings
    MONGO_URI = os.getenv('MONGO_URI')
    MONGO_DB_NAME = os.getenv('MONGO_DB_NAME', 'puzzlehub')

    # Authentication Settings
    JWT_SECRET = os.getenv('JWT_SECRET')
    JWT_EXPIRATION_DAYS = int(os.getenv('JWT_EXPIRATION_DAYS', 7))
    SESSION_COOKIE_NAME_TOKEN = os.getenv('SESSION_COOKIE_NAME_TOKEN', 'session_token')

    # Puzzle Source Settings
    PUZZLE_TIMEZONE = os.getenv('PUZZLE_TIMEZONE', 'America/New_York')
    UPSTREAM_BASE_URL = os.getenv('UPSTREAM_BASE_URL', 'https://www.nytimes.com/svc')
    UPSTREAM_TIMEOUT_SECONDS = float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', 10))

    # Client Settings
    REMOTE_BASE_URL = os.getenv('REMOTE_BASE_URL', 'http://127.0.0.1:5000')
    LOCAL_STORE_PATH = os.getenv('LOCAL_STORE_PATH', 'puzzlehub_local.json')

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    JWT_SECRET = 'testing-jwt-secret'
    MONGO_DB_NAME = 'puzzlehub_test'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
