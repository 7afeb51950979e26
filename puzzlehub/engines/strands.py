"""
Strands Evaluator

Path validation for the letter grid. Word classification itself belongs
to the remote word-check service; see ``StrandsSession.submit_path``.
"""

from typing import List, Sequence, Tuple

from ..config.game_settings import MAX_PATH_LENGTH, MIN_PATH_LENGTH
from ..exceptions import InputInvalid
from ..models.game import Coord
from ..models.puzzle import StrandsPuzzle


def is_adjacent(a: Coord, b: Coord) -> bool:
    """8-directional neighbours (Chebyshev distance exactly 1)."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1


def validate_path(coords: Sequence[Sequence[int]], rows: int, cols: int) -> Tuple[Coord, ...]:
    """
    Check a traced path and return it as a tuple of (row, col) cells.

    Raises:
        InputInvalid: Too short or long, off the board, a non-adjacent
            step, or a repeated cell
    """
    if not MIN_PATH_LENGTH <= len(coords) <= MAX_PATH_LENGTH:
        raise InputInvalid(f"Select at least {MIN_PATH_LENGTH} letters")

    path: List[Coord] = []
    for cell in coords:
        try:
            row, col = (int(v) for v in cell)
        except (TypeError, ValueError):
            raise InputInvalid(f"Invalid cell {cell!r}")
        if not (0 <= row < rows and 0 <= col < cols):
            raise InputInvalid(f"Cell {(row, col)} is outside the board")
        if (row, col) in path:
            raise InputInvalid(f"Cell {(row, col)} used twice")
        if path and not is_adjacent(path[-1], (row, col)):
            raise InputInvalid(f"Cell {(row, col)} is not next to {path[-1]}")
        path.append((row, col))

    return tuple(path)


def word_for_path(puzzle: StrandsPuzzle, path: Sequence[Coord]) -> str:
    """Letters along a validated path, upper case."""
    return ''.join(puzzle.letter_at(row, col) for row, col in path).upper()
