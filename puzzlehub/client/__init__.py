"""
Client Package

Async access to the hub's HTTP API from the player's side.
"""

from .remote import RemoteResultClient, load_daily_wordle

__all__ = ['RemoteResultClient', 'load_daily_wordle']
