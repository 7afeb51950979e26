"""
Puzzle Definition Models

Immutable per-date puzzle definitions and the structural validation every
payload goes through before it reaches an evaluator. Both the trimmed
payload served by the hub and the raw upstream payload are accepted.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from ..config.game_settings import CATEGORY_COUNT, GROUP_SIZE, MAX_GRID_INDEX
from ..exceptions import UpstreamMalformed
from ..utils.helpers import is_valid_date

_LETTERS = re.compile(r'^[A-Za-z]+$')


@dataclass(frozen=True)
class WordlePuzzle:
    date: str
    solution: str

    def to_dict(self) -> Dict[str, Any]:
        return {'date': self.date, 'solution': self.solution}


@dataclass(frozen=True)
class ConnectionsCard:
    content: str
    position: int


@dataclass(frozen=True)
class ConnectionsCategory:
    title: str
    cards: Tuple[ConnectionsCard, ...]


@dataclass(frozen=True)
class ConnectionsPuzzle:
    date: str
    categories: Tuple[ConnectionsCategory, ...]

    def category_of(self, content: str) -> Optional[int]:
        """Index of the category holding a card, or None for unknown cards."""
        for index, category in enumerate(self.categories):
            if any(card.content == content for card in category.cards):
                return index
        return None

    def cards_in_display_order(self) -> List[ConnectionsCard]:
        cards = [card for category in self.categories for card in category.cards]
        return sorted(cards, key=lambda card: card.position)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'categories': [
                {
                    'title': category.title,
                    'cards': [{'content': c.content, 'position': c.position} for c in category.cards],
                }
                for category in self.categories
            ],
        }


@dataclass(frozen=True)
class StrandsPuzzle:
    date: str
    clue: str
    starting_board: Tuple[str, ...]
    theme_word_count: int

    @property
    def rows(self) -> int:
        return len(self.starting_board)

    @property
    def cols(self) -> int:
        return len(self.starting_board[0]) if self.starting_board else 0

    def letter_at(self, row: int, col: int) -> str:
        return self.starting_board[row][col]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date,
            'clue': self.clue,
            'startingBoard': list(self.starting_board),
            'rows': self.rows,
            'cols': self.cols,
            'themeWordCount': self.theme_word_count,
        }


def _require_object(payload: Any, game: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise UpstreamMalformed(f"{game} payload must be a JSON object")
    return payload


def _resolve_date(payload: Dict[str, Any], date: Optional[str]) -> str:
    candidate = payload.get('date') or payload.get('print_date') or payload.get('printDate')
    if is_valid_date(candidate):
        return candidate
    if is_valid_date(date):
        return date
    raise UpstreamMalformed("Puzzle payload has no valid date")


def parse_wordle_puzzle(payload: Any, date: Optional[str] = None, length: int = 5) -> WordlePuzzle:
    """Validate a Wordle payload; the solution is normalized to lower case."""
    data = _require_object(payload, 'Wordle')
    solution = data.get('solution')
    if not isinstance(solution, str):
        raise UpstreamMalformed("Wordle payload has no solution")
    solution = solution.strip().lower()
    if len(solution) != length or not _LETTERS.match(solution):
        raise UpstreamMalformed(f"Wordle solution must be {length} letters")
    return WordlePuzzle(date=_resolve_date(data, date), solution=solution)


def parse_connections_puzzle(payload: Any, date: Optional[str] = None) -> ConnectionsPuzzle:
    """
    Validate a Connections payload.

    Requires exactly four categories of four cards, each card with string
    content and a numeric position. Card contents must be unique.
    """
    data = _require_object(payload, 'Connections')
    raw_categories = data.get('categories')
    if not isinstance(raw_categories, list) or len(raw_categories) != CATEGORY_COUNT:
        raise UpstreamMalformed(f"Connections payload must have {CATEGORY_COUNT} categories")

    categories = []
    seen = set()
    for raw in raw_categories:
        if not isinstance(raw, dict) or not isinstance(raw.get('title'), str):
            raise UpstreamMalformed("Connections category needs a title")
        raw_cards = raw.get('cards')
        if not isinstance(raw_cards, list) or len(raw_cards) != GROUP_SIZE:
            raise UpstreamMalformed(f"Connections category must have {GROUP_SIZE} cards")

        cards = []
        for card in raw_cards:
            if not isinstance(card, dict):
                raise UpstreamMalformed("Connections card must be an object")
            content = card.get('content')
            position = card.get('position')
            if not isinstance(content, str) or not content:
                raise UpstreamMalformed("Connections card needs string content")
            if isinstance(position, bool) or not isinstance(position, (int, float)):
                raise UpstreamMalformed("Connections card needs a numeric position")
            if content in seen:
                raise UpstreamMalformed(f"Duplicate Connections card: {content}")
            seen.add(content)
            cards.append(ConnectionsCard(content=content, position=int(position)))

        categories.append(ConnectionsCategory(title=raw['title'], cards=tuple(cards)))

    return ConnectionsPuzzle(date=_resolve_date(data, date), categories=tuple(categories))


def parse_strands_puzzle(payload: Any, date: Optional[str] = None) -> StrandsPuzzle:
    """Validate a Strands payload into a rectangular letter grid."""
    data = _require_object(payload, 'Strands')
    board = data.get('startingBoard', data.get('starting_board'))
    clue = data.get('clue')
    if not isinstance(board, list) or not board or not isinstance(clue, str):
        raise UpstreamMalformed("Strands payload needs a clue and a starting board")
    if not all(isinstance(row, str) and _LETTERS.match(row) for row in board):
        raise UpstreamMalformed("Strands board rows must be strings of letters")

    width = len(board[0])
    if any(len(row) != width for row in board):
        raise UpstreamMalformed("Strands board must be rectangular")
    if len(board) > MAX_GRID_INDEX + 1 or width > MAX_GRID_INDEX + 1:
        raise UpstreamMalformed("Strands board is too large")

    count = data.get('themeWordCount', data.get('theme_word_count'))
    if count is None and isinstance(data.get('themeWords'), list):
        count = len(data['themeWords'])
    try:
        count = int(count or 0)
    except (TypeError, ValueError):
        raise UpstreamMalformed("Strands theme word count must be a number")
    if count < 0:
        raise UpstreamMalformed("Strands theme word count cannot be negative")

    return StrandsPuzzle(
        date=_resolve_date(data, date),
        clue=clue,
        starting_board=tuple(row.upper() for row in board),
        theme_word_count=count,
    )
