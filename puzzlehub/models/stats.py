"""
Statistics Data Models

Contains the derived per-game statistics returned to players.
"""

from dataclasses import dataclass, field
from typing import Dict

from .game import GameKind


@dataclass
class GameStats:
    """Lifetime statistics for one game, derived from raw counters."""
    game: GameKind
    games_played: int = 0
    completed: int = 0
    win_rate: int = 0
    distribution: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            'game': self.game.value,
            'games_played': self.games_played,
            'completed': self.completed,
            'winRate': self.win_rate,
            'distribution': dict(self.distribution),
        }
