"""
Wordle Session

Rows of guesses, their evaluations and the keyboard letter summary for
one Wordle puzzle.
"""

import random
import string
from typing import Collection, Dict, List, Optional

from ..config.game_settings import MAX_ROUNDS, words_for_length
from ..engines import wordle
from ..exceptions import InputInvalid
from ..models.game import GameKind, LETTER_PRIORITY, Evaluation, LetterResult
from ..models.progress import WordleProgress
from ..models.puzzle import WordlePuzzle
from .base import GameSession


class WordleSession(GameSession):
    """
    State for one Wordle puzzle.

    Invalid guesses are rejected before evaluation and never use up a row.
    The solution is always an accepted guess, even when it is missing from
    the bundled word list. Endless sessions (``daily=False``) are never
    persisted or counted in stats.
    """

    game = GameKind.WORDLE

    def __init__(self, puzzle: WordlePuzzle, accepted: Optional[Collection[str]] = None,
                 max_rounds: int = MAX_ROUNDS, daily: bool = True):
        super().__init__(puzzle.date)
        self.daily = daily
        self.solution = puzzle.solution
        self.cols = len(puzzle.solution)
        self.max_rounds = max_rounds
        words = accepted if accepted is not None else words_for_length(self.cols)
        self.accepted = set(words) | {self.solution}

        self.guesses: List[str] = []
        self.evaluations: List[Evaluation] = []
        self.letter_status: Dict[str, LetterResult] = {
            letter: LetterResult.UNUSED for letter in string.ascii_lowercase
        }

    @classmethod
    def endless(cls, date: str, length: int, rng: Optional[random.Random] = None) -> 'WordleSession':
        """A practice game on a random word of the given length."""
        words = words_for_length(length)
        puzzle = WordlePuzzle(date=date, solution=wordle.random_word(words, rng))
        return cls(puzzle, accepted=words, daily=False)

    @property
    def current_round(self) -> int:
        return len(self.guesses)

    @property
    def is_won(self) -> bool:
        return bool(self.guesses) and self.guesses[-1] == self.solution

    @property
    def is_done(self) -> bool:
        return self.is_won or self.current_round >= self.max_rounds

    def submit_guess(self, guess: str) -> Evaluation:
        """Play one row and return its evaluation."""
        if self.is_done:
            raise InputInvalid("Game is already over")

        normalized = wordle.check_guess(guess, self.cols, self.accepted)
        evaluation = wordle.evaluate(self.solution, normalized)

        self.guesses.append(normalized)
        self.evaluations.append(evaluation)
        self._update_letter_status(normalized, evaluation)
        return evaluation

    def _update_letter_status(self, guess: str, evaluation: Evaluation) -> None:
        # Status only ever moves up: unused -> absent -> present -> correct
        for letter, result in zip(guess, evaluation):
            if LETTER_PRIORITY[result] > LETTER_PRIORITY[self.letter_status[letter]]:
                self.letter_status[letter] = result

    def _win_detail(self) -> dict:
        return {'guessCount': self.current_round}

    def snapshot(self) -> WordleProgress:
        return WordleProgress(date=self.date, guesses=tuple(self.guesses), cols=self.cols)

    def restore(self, snapshot: Optional[WordleProgress]) -> bool:
        """
        Replay stored guesses onto a fresh session.

        Snapshots for another date or word length are ignored. Replay stops
        at the first guess that no longer validates.
        """
        if not self.daily:
            return False
        if snapshot is None or snapshot.date != self.date or snapshot.cols != self.cols:
            return False
        if self.guesses:
            return False

        for guess in snapshot.guesses:
            try:
                self.submit_guess(guess)
            except InputInvalid:
                break
        return True
