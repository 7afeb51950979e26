"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    Coord, EventKind, Evaluation, FoundPath, GameKind, LetterResult, SolvedGroup, WordKind
)
from .progress import (
    ConnectionsProgress, PendingEvent, StrandsProgress, WordleProgress, progress_from_dict
)
from .puzzle import (
    ConnectionsCard, ConnectionsCategory, ConnectionsPuzzle, StrandsPuzzle, WordlePuzzle,
    parse_connections_puzzle, parse_strands_puzzle, parse_wordle_puzzle
)
from .stats import GameStats
from .user import User

__all__ = [
    'Coord', 'EventKind', 'Evaluation', 'FoundPath', 'GameKind', 'LetterResult', 'SolvedGroup', 'WordKind',
    'ConnectionsProgress', 'PendingEvent', 'StrandsProgress', 'WordleProgress', 'progress_from_dict',
    'ConnectionsCard', 'ConnectionsCategory', 'ConnectionsPuzzle', 'StrandsPuzzle', 'WordlePuzzle',
    'parse_connections_puzzle', 'parse_strands_puzzle', 'parse_wordle_puzzle',
    'GameStats', 'User'
]
