"""
Services Package

Contains the business logic behind the HTTP endpoints and the client sync
layer.
"""

from .auth_service import AuthService, get_auth_service, initialize_auth_service
from .puzzle_service import PuzzleService, get_puzzle_service, initialize_puzzle_service
from .result_service import ResultService, get_result_service, initialize_result_service
from . import stats_service

__all__ = [
    'AuthService', 'get_auth_service', 'initialize_auth_service',
    'PuzzleService', 'get_puzzle_service', 'initialize_puzzle_service',
    'ResultService', 'get_result_service', 'initialize_result_service',
    'stats_service',
]
