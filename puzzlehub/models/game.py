"""
Game Data Models

Contains the enums and small value types shared by every game.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class GameKind(Enum):
    """The daily games served by the hub."""
    WORDLE = "wordle"
    CONNECTIONS = "connections"
    STRANDS = "strands"


class LetterResult(Enum):
    """Per-position Wordle evaluation."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    UNUSED = "unused"  # keyboard summary only, never part of an evaluation


# Upgrade order for the keyboard letter summary
LETTER_PRIORITY = {
    LetterResult.UNUSED: 0,
    LetterResult.ABSENT: 1,
    LetterResult.PRESENT: 2,
    LetterResult.CORRECT: 3,
}


class EventKind(Enum):
    """Terminal result of a puzzle."""
    WIN = "win"
    LOSS = "loss"


class WordKind(Enum):
    """Strands word classification."""
    THEME = "theme"
    SPANGRAM = "spangram"
    OTHER = "other"


Coord = Tuple[int, int]
Evaluation = List[LetterResult]


@dataclass(frozen=True)
class FoundPath:
    """A Strands word the player traced, with the cells it used."""
    kind: WordKind
    word: str
    coords: Tuple[Coord, ...]

    def to_dict(self) -> dict:
        return {
            'kind': self.kind.value,
            'word': self.word,
            'coords': [{'r': r, 'c': c} for r, c in self.coords],
        }


@dataclass(frozen=True)
class SolvedGroup:
    """A Connections category the player has grouped correctly."""
    category_index: int
    title: str
    cards: Tuple[str, ...]
