"""
Progress and Pending Event Models

Progress snapshots hold the minimal state needed to resume one puzzle
date. Pending events are terminal results waiting to be delivered to the
remote result service. Both serialize to the JSON wire format shared by
the local store and the HTTP API (camelCase keys, unknown keys ignored).

``from_dict`` is strict: anything out of range raises StorageCorrupt so
the caller can treat the record as absent.
"""

import time
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Tuple

from ..config.game_settings import (
    MAX_GRID_INDEX, MAX_GUESS_COUNT, MAX_MISTAKES, MAX_PATH_LENGTH, MAX_ROUNDS, MAX_WORD_LENGTH,
    CATEGORY_COUNT, MIN_PATH_LENGTH
)
from ..exceptions import StorageCorrupt
from ..utils.helpers import is_valid_date
from .game import EventKind, FoundPath, GameKind, WordKind


def clamp_int(value: Any, low: int, high: int) -> int:
    """An integer inside [low, high], or StorageCorrupt."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StorageCorrupt(f"Expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise StorageCorrupt(f"Expected an integer, got {value!r}")
        value = int(value)
    if value < low or value > high:
        raise StorageCorrupt(f"{value} outside [{low}, {high}]")
    return value


def normalize_word(word: Any) -> str:
    """Trimmed, upper-cased Strands word of two or more letters."""
    if not isinstance(word, str):
        raise StorageCorrupt(f"Expected a word, got {word!r}")
    normalized = word.strip().upper()
    if len(normalized) < 2 or not normalized.isalpha() or not normalized.isascii():
        raise StorageCorrupt(f"Invalid word {word!r}")
    return normalized


def _require_date(value: Any) -> str:
    if not is_valid_date(value):
        raise StorageCorrupt(f"Invalid date {value!r}")
    return value


def _timestamp(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return time.time()
    return float(value)


def _require_object(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise StorageCorrupt("Record must be an object")
    return raw


@dataclass(frozen=True)
class WordleProgress:
    game: ClassVar[GameKind] = GameKind.WORDLE

    date: str
    guesses: Tuple[str, ...]
    cols: int
    updated_at: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, 'guesses', tuple(self.guesses))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'guesses': list(self.guesses),
            'cols': self.cols,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> 'WordleProgress':
        data = _require_object(raw)
        cols = clamp_int(data.get('cols'), 1, MAX_WORD_LENGTH)
        guesses = data.get('guesses')
        if not isinstance(guesses, list) or len(guesses) > MAX_ROUNDS:
            raise StorageCorrupt("Wordle guesses must be a list of at most the round count")
        for guess in guesses:
            if not isinstance(guess, str) or len(guess) != cols or not guess.isalpha() or not guess.islower():
                raise StorageCorrupt(f"Invalid stored guess {guess!r}")
        return cls(
            date=_require_date(data.get('date')),
            guesses=tuple(guesses),
            cols=cols,
            updated_at=_timestamp(data.get('updatedAt')),
        )


@dataclass(frozen=True)
class ConnectionsProgress:
    game: ClassVar[GameKind] = GameKind.CONNECTIONS

    date: str
    mistakes_left: int
    solved_category_indexes: Tuple[int, ...]
    updated_at: float = field(default_factory=time.time)

    def __post_init__(self):
        object.__setattr__(self, 'solved_category_indexes', tuple(sorted(set(self.solved_category_indexes))))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'mistakesLeft': self.mistakes_left,
            'solvedCategoryIndexes': list(self.solved_category_indexes),
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> 'ConnectionsProgress':
        data = _require_object(raw)
        indexes = data.get('solvedCategoryIndexes')
        if not isinstance(indexes, list):
            raise StorageCorrupt("solvedCategoryIndexes must be a list")
        return cls(
            date=_require_date(data.get('date')),
            mistakes_left=clamp_int(data.get('mistakesLeft'), 0, MAX_MISTAKES),
            solved_category_indexes=tuple(clamp_int(i, 0, CATEGORY_COUNT - 1) for i in indexes),
            updated_at=_timestamp(data.get('updatedAt')),
        )


def parse_found_path(raw: Any) -> FoundPath:
    data = _require_object(raw)
    try:
        kind = WordKind(data.get('kind'))
    except ValueError:
        raise StorageCorrupt(f"Invalid path kind {data.get('kind')!r}")
    if kind == WordKind.OTHER:
        raise StorageCorrupt("Only theme words and the spangram have paths")

    coords = data.get('coords')
    if not isinstance(coords, list) or not MIN_PATH_LENGTH <= len(coords) <= MAX_PATH_LENGTH:
        raise StorageCorrupt("Path must hold between 2 and 80 cells")
    cells = []
    for cell in coords:
        cell = _require_object(cell)
        cells.append((clamp_int(cell.get('r'), 0, MAX_GRID_INDEX), clamp_int(cell.get('c'), 0, MAX_GRID_INDEX)))

    return FoundPath(kind=kind, word=normalize_word(data.get('word')), coords=tuple(cells))


@dataclass(frozen=True)
class StrandsProgress:
    game: ClassVar[GameKind] = GameKind.STRANDS

    date: str
    found_theme_words: Tuple[str, ...]
    found_spangram: bool
    found_paths: Tuple[FoundPath, ...]
    gave_up: bool = False
    updated_at: float = field(default_factory=time.time)

    def __post_init__(self):
        # De-duplicate, keeping the first occurrence
        words = tuple(dict.fromkeys(w.strip().upper() for w in self.found_theme_words))
        seen = set()
        paths = []
        for path in self.found_paths:
            key = (path.kind, path.word)
            if key not in seen:
                seen.add(key)
                paths.append(path)
        object.__setattr__(self, 'found_theme_words', words)
        object.__setattr__(self, 'found_paths', tuple(paths))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'foundThemeWords': list(self.found_theme_words),
            'foundSpangram': self.found_spangram,
            'foundPaths': [path.to_dict() for path in self.found_paths],
            'gaveUp': self.gave_up,
            'updatedAt': self.updated_at,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> 'StrandsProgress':
        data = _require_object(raw)
        words = data.get('foundThemeWords', data.get('foundWords', []))
        paths = data.get('foundPaths', [])
        if not isinstance(words, list) or not isinstance(paths, list):
            raise StorageCorrupt("Strands found words and paths must be lists")
        return cls(
            date=_require_date(data.get('date')),
            found_theme_words=tuple(normalize_word(w) for w in words),
            found_spangram=bool(data.get('foundSpangram')),
            found_paths=tuple(parse_found_path(p) for p in paths),
            gave_up=bool(data.get('gaveUp')),
            updated_at=_timestamp(data.get('updatedAt')),
        )


PROGRESS_TYPES = {
    GameKind.WORDLE: WordleProgress,
    GameKind.CONNECTIONS: ConnectionsProgress,
    GameKind.STRANDS: StrandsProgress,
}


def progress_from_dict(game: GameKind, raw: Any):
    """Parse a progress record of the given game (StorageCorrupt on failure)."""
    return PROGRESS_TYPES[game].from_dict(raw)


@dataclass(frozen=True)
class PendingEvent:
    """A terminal result not yet confirmed by the remote result service."""
    game: GameKind
    kind: EventKind
    date: str
    detail: Dict[str, int] = field(default_factory=dict, hash=False)
    created_at: float = field(default_factory=time.time)

    @property
    def guess_count(self) -> Optional[int]:
        return self.detail.get('guessCount')

    @property
    def mistakes_used(self) -> Optional[int]:
        return self.detail.get('mistakesUsed')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind.value,
            'date': self.date,
            'createdAt': self.created_at,
            **self.detail,
        }

    def payload(self) -> Dict[str, Any]:
        """Request body for the win/loss endpoint."""
        return {'date': self.date, **self.detail}

    @classmethod
    def from_dict(cls, game: GameKind, raw: Any) -> 'PendingEvent':
        data = _require_object(raw)
        try:
            kind = EventKind(data.get('type'))
        except ValueError:
            raise StorageCorrupt(f"Invalid event type {data.get('type')!r}")

        detail = {}
        if kind == EventKind.WIN and game == GameKind.WORDLE:
            detail['guessCount'] = clamp_int(data.get('guessCount'), 1, MAX_GUESS_COUNT)
        elif kind == EventKind.WIN and game == GameKind.CONNECTIONS:
            detail['mistakesUsed'] = clamp_int(data.get('mistakesUsed'), 0, MAX_MISTAKES)

        return cls(
            game=game,
            kind=kind,
            date=_require_date(data.get('date')),
            detail=detail,
            created_at=_timestamp(data.get('createdAt')),
        )
