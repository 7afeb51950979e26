"""
Strands Session

Found theme words, the spangram and their traced paths for one Strands
puzzle. There is no mistake counter; a game is lost only by giving up.
"""

from typing import List, Optional, Protocol, Sequence

from ..engines import strands
from ..exceptions import InputInvalid
from ..models.game import FoundPath, GameKind, WordKind
from ..models.progress import StrandsProgress
from ..models.puzzle import StrandsPuzzle
from .base import GameSession


class WordClassifier(Protocol):
    async def classify_word(self, date: str, word: str) -> WordKind:
        ...


class StrandsSession(GameSession):
    game = GameKind.STRANDS

    def __init__(self, puzzle: StrandsPuzzle):
        super().__init__(puzzle.date)
        self.puzzle = puzzle
        self.found_paths: List[FoundPath] = []
        self.found_theme_words: List[str] = []
        self.found_spangram = False
        self.gave_up = False

    @property
    def is_won(self) -> bool:
        if self.gave_up or self.puzzle.theme_word_count <= 0:
            return False
        return self.found_spangram and len(self.found_theme_words) >= self.puzzle.theme_word_count

    @property
    def is_done(self) -> bool:
        return self.gave_up or self.is_won

    def _found_kind(self, word: str) -> Optional[WordKind]:
        for path in self.found_paths:
            if path.word == word:
                return path.kind
        return None

    async def submit_path(self, coords: Sequence[Sequence[int]], classifier: WordClassifier) -> WordKind:
        """
        Validate a traced path, classify its word and record a find.

        The path is checked before any remote call. A word that was
        already found is answered from local state without a second entry.

        Raises:
            InputInvalid: Bad path, reused cells, or the game is over
            UpstreamUnavailable: The word-check service could not answer
        """
        if self.is_done:
            raise InputInvalid("Game is already over")

        path = strands.validate_path(coords, self.puzzle.rows, self.puzzle.cols)
        word = strands.word_for_path(self.puzzle, path)

        known = self._found_kind(word)
        if known is not None:
            return known

        used = {cell for found in self.found_paths for cell in found.coords}
        if used.intersection(path):
            raise InputInvalid("Those letters are already part of a found word")

        kind = await classifier.classify_word(self.date, word)
        self._record(kind, word, path)
        return kind

    def _record(self, kind: WordKind, word: str, path) -> None:
        if kind == WordKind.SPANGRAM:
            if any(p.kind == WordKind.SPANGRAM for p in self.found_paths):
                return
            self.found_spangram = True
            self.found_paths.append(FoundPath(kind=kind, word=word, coords=tuple(path)))
        elif kind == WordKind.THEME:
            if word in self.found_theme_words:
                return
            self.found_theme_words.append(word)
            self.found_theme_words.sort()
            self.found_paths.append(FoundPath(kind=kind, word=word, coords=tuple(path)))

    def give_up(self) -> None:
        if not self.is_done:
            self.gave_up = True

    def snapshot(self) -> StrandsProgress:
        return StrandsProgress(
            date=self.date,
            found_theme_words=tuple(self.found_theme_words),
            found_spangram=self.found_spangram,
            found_paths=tuple(self.found_paths),
            gave_up=self.gave_up,
        )

    def restore(self, snapshot: Optional[StrandsProgress]) -> bool:
        if snapshot is None or snapshot.date != self.date:
            return False

        self.found_paths = []
        for path in snapshot.found_paths:
            try:
                strands.validate_path(path.coords, self.puzzle.rows, self.puzzle.cols)
            except InputInvalid:
                continue
            self.found_paths.append(path)

        self.found_theme_words = sorted(set(snapshot.found_theme_words))
        self.found_spangram = snapshot.found_spangram or any(
            p.kind == WordKind.SPANGRAM for p in self.found_paths
        )
        self.gave_up = snapshot.gave_up
        return True
