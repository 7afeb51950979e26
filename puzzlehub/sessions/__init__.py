"""
Session State Package

Mutable, in-memory state for the puzzle instance currently on screen.
"""

from .base import GameSession
from .connections_session import ConnectionsSession
from .strands_session import StrandsSession, WordClassifier
from .wordle_session import WordleSession

__all__ = ['GameSession', 'ConnectionsSession', 'StrandsSession', 'WordClassifier', 'WordleSession']
