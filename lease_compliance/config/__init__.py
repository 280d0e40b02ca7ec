"""
Configuration Management
Configuration with environment variables
"""

import os
from pathlib import Path

# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent

class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'lease-compliance-secret-key-change-in-production')
    DATABASE_PATH = Path(os.environ.get('DATABASE_PATH', BASE_DIR / 'lease_compliance.db'))
    LOG_DIR = Path(os.environ.get('LOG_DIR', BASE_DIR / 'logs'))

    # Flask settings
    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    DEBUG = FLASK_ENV == 'development'
    TESTING = False

    # API settings
    API_HOST = os.environ.get('API_HOST', 'localhost')
    API_PORT = int(os.environ.get('API_PORT', 5001))

    # CORS settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Logging
    LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT = 5

    # Schedule defaults when the request omits them
    DEFAULT_DISCOUNT_RATE = float(os.environ.get('DEFAULT_DISCOUNT_RATE', 0.05))
    DEFAULT_LEASE_TERM_YEARS = int(os.environ.get('DEFAULT_LEASE_TERM_YEARS', 5))


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False


class TestingConfig(Config):
    """Test configuration - callers override DATABASE_PATH and LOG_DIR"""
    TESTING = True
    DEBUG = False


# Get configuration based on environment
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
