"""
Evaluators Package

Pure, stateless per-game evaluation functions.
"""

from . import connections, strands, wordle

__all__ = ['connections', 'strands', 'wordle']
