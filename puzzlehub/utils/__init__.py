"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_auth, get_request_token
from .helpers import get_user_identity, is_valid_date, puzzle_date
from .game_logger import game_logger

__all__ = ['require_auth', 'get_request_token', 'get_user_identity', 'is_valid_date', 'puzzle_date', 'game_logger']
