"""
Connections Session

Selection, solved groups and remaining mistakes for one Connections puzzle.
"""

import random
from typing import List, Optional, Set

from ..config.game_settings import CATEGORY_COUNT, GROUP_SIZE, MAX_MISTAKES
from ..engines import connections
from ..engines.connections import SubmitResult
from ..exceptions import InputInvalid
from ..models.game import GameKind, SolvedGroup
from ..models.progress import ConnectionsProgress
from ..models.puzzle import ConnectionsPuzzle
from .base import GameSession


class ConnectionsSession(GameSession):
    game = GameKind.CONNECTIONS

    def __init__(self, puzzle: ConnectionsPuzzle, max_mistakes: int = MAX_MISTAKES):
        super().__init__(puzzle.date)
        self.puzzle = puzzle
        self.max_mistakes = max_mistakes
        self.mistakes_left = max_mistakes
        self.selected: Set[str] = set()
        self.solved: List[SolvedGroup] = []
        self.tiles: List[str] = [card.content for card in puzzle.cards_in_display_order()]

    @property
    def solved_indexes(self) -> Set[int]:
        return {group.category_index for group in self.solved}

    @property
    def solved_contents(self) -> Set[str]:
        return {content for group in self.solved for content in group.cards}

    @property
    def is_won(self) -> bool:
        return len(self.solved) == CATEGORY_COUNT

    @property
    def is_done(self) -> bool:
        return self.is_won or self.mistakes_left <= 0

    @property
    def mistakes_used(self) -> int:
        return min(self.max_mistakes, max(0, self.max_mistakes - self.mistakes_left))

    def toggle(self, content: str) -> bool:
        """
        Select or deselect a tile. Returns whether it is selected afterwards.

        Solved tiles, unknown tiles and a fifth selection are ignored.
        """
        if self.is_done or content in self.solved_contents:
            return False
        if self.puzzle.category_of(content) is None:
            return False
        if content in self.selected:
            self.selected.discard(content)
            return False
        if len(self.selected) >= GROUP_SIZE:
            return False
        self.selected.add(content)
        return True

    def deselect_all(self) -> None:
        self.selected.clear()

    def submit(self) -> SubmitResult:
        """Judge the current selection and apply the outcome."""
        if self.is_done:
            raise InputInvalid("Game is already over")

        result = connections.submit(self.selected, self.puzzle, self.solved_indexes)
        if result.match:
            self._add_solved(result.category_index)
            self.selected.clear()
        else:
            self.mistakes_left = max(0, self.mistakes_left - 1)
        return result

    def _add_solved(self, category_index: int) -> None:
        # Set semantics on category_index
        if category_index in self.solved_indexes:
            return
        category = self.puzzle.categories[category_index]
        self.solved.append(SolvedGroup(
            category_index=category_index,
            title=category.title,
            cards=tuple(card.content for card in category.cards),
        ))

    def shuffle(self, rng: Optional[random.Random] = None) -> List[str]:
        """Shuffle unsolved tiles; solved tiles stay in front."""
        solved = self.solved_contents
        front = [t for t in self.tiles if t in solved]
        rest = [t for t in self.tiles if t not in solved]
        (rng or random).shuffle(rest)
        self.tiles = front + rest
        return list(self.tiles)

    def _win_detail(self) -> dict:
        return {'mistakesUsed': self.mistakes_used}

    def snapshot(self) -> ConnectionsProgress:
        return ConnectionsProgress(
            date=self.date,
            mistakes_left=self.mistakes_left,
            solved_category_indexes=tuple(group.category_index for group in self.solved),
        )

    def restore(self, snapshot: Optional[ConnectionsProgress]) -> bool:
        if snapshot is None or snapshot.date != self.date:
            return False
        self.mistakes_left = max(0, min(self.max_mistakes, snapshot.mistakes_left))
        self.solved = []
        for index in snapshot.solved_category_indexes:
            if 0 <= index < len(self.puzzle.categories):
                self._add_solved(index)
        self.selected.clear()
        return True
