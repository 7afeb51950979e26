"""
Connections Evaluator

Decides whether a four-card selection is one of the puzzle's categories.
"""

from dataclasses import dataclass
from typing import Collection, Iterable, Optional

from ..config.game_settings import GROUP_SIZE
from ..exceptions import InputInvalid
from ..models.puzzle import ConnectionsPuzzle


@dataclass(frozen=True)
class SubmitResult:
    match: bool
    category_index: Optional[int] = None


def submit(selection: Iterable[str], puzzle: ConnectionsPuzzle, solved: Collection[int] = ()) -> SubmitResult:
    """
    Evaluate a selection of card contents.

    A match means all four cards share one category that is not solved
    yet. Selections that cannot be judged (wrong size, unknown cards, cards
    from a solved category) raise InputInvalid and cost no mistake.
    """
    cards = set(selection)
    if len(cards) != GROUP_SIZE:
        raise InputInvalid(f"Select {GROUP_SIZE} tiles")

    indexes = set()
    for content in cards:
        index = puzzle.category_of(content)
        if index is None:
            raise InputInvalid(f"Unknown card: {content}")
        if index in solved:
            raise InputInvalid(f"Card already solved: {content}")
        indexes.add(index)

    if len(indexes) == 1:
        return SubmitResult(match=True, category_index=indexes.pop())
    return SubmitResult(match=False)
