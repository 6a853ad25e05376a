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

    # WordsAPI Settings (an empty key keeps the dictionary on its local word list)
    WORDS_API_KEY = os.getenv('WORDS_API_KEY', '')
    WORDS_API_HOST = os.getenv('WORDS_API_HOST', 'wordsapiv1.p.rapidapi.com')
    WORDS_API_URL = os.getenv('WORDS_API_URL', 'https://wordsapiv1.p.rapidapi.com')
    WORDS_API_TIMEOUT_SECONDS = float(os.getenv('WORDS_API_TIMEOUT_SECONDS', 3.0))
    WORDS_API_MONTHLY_LIMIT = int(os.getenv('WORDS_API_MONTHLY_LIMIT', 2500))

    # Game Settings
    DIFFICULTY = os.getenv('DIFFICULTY', 'medium')
    HARD_MODE = os.getenv('HARD_MODE', 'False').lower() == 'true'

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
    WORDS_API_KEY = ''
    HARD_MODE = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
