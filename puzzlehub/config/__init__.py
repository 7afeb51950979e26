"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application and client configuration (environment-based)
- game_settings.py: Game rules, limits and word lists (business logic)
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LIST, WORDS_BY_LENGTH, MAX_ROUNDS, MAX_MISTAKES, GROUP_SIZE,
    words_for_length, validate_word_list_integrity
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'WORD_LIST', 'WORDS_BY_LENGTH', 'MAX_ROUNDS', 'MAX_MISTAKES', 'GROUP_SIZE',
    'words_for_length', 'validate_word_list_integrity'
]
