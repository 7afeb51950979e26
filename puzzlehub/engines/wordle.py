"""
Wordle Evaluator

Pure functions: letter scoring, guess validation and daily word selection.
"""

import datetime
import random
import re
from collections import Counter
from typing import Collection, List, Optional, Sequence

from ..exceptions import InputInvalid
from ..models.game import LetterResult


def evaluate(solution: str, guess: str) -> List[LetterResult]:
    """
    Score a guess against the solution.

    Exact matches are marked first and consume their letter; remaining
    letters are marked present only while the solution still has unmatched
    copies of them, so repeated letters are never over-credited.
    """
    if len(solution) != len(guess):
        raise InputInvalid("Guess and solution must have the same length")

    remaining = Counter(solution)
    result = [LetterResult.ABSENT] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == solution[i]:
            result[i] = LetterResult.CORRECT
            remaining[letter] -= 1

    # Second pass: present letters, consuming remaining counts
    for i, letter in enumerate(guess):
        if result[i] == LetterResult.CORRECT:
            continue
        if remaining[letter] > 0:
            result[i] = LetterResult.PRESENT
            remaining[letter] -= 1

    return result


def is_valid_guess(word: str, length: int) -> bool:
    """True when ``word`` is exactly ``length`` ASCII letters."""
    return isinstance(word, str) and re.fullmatch(rf'[a-zA-Z]{{{length}}}', word) is not None


def check_guess(guess: str, length: int, accepted: Collection[str]) -> str:
    """
    Normalize a guess and make sure it may be played.

    Returns:
        str: The lowercase guess

    Raises:
        InputInvalid: Wrong length, non-letters, or not in the word list
    """
    if not isinstance(guess, str):
        raise InputInvalid("Guess must be a valid string")

    normalized = guess.strip().lower()
    if len(normalized) != length:
        raise InputInvalid(f"Guess must be exactly {length} letters")
    if not is_valid_guess(normalized, length):
        raise InputInvalid("Guess must contain only letters")
    if normalized not in accepted:
        raise InputInvalid("Word not in word list")
    return normalized


def daily_index(base_date: datetime.date, word_count: int, today: datetime.date) -> int:
    """Whole days elapsed since ``base_date``, wrapped onto the word list."""
    if word_count <= 0:
        raise ValueError("Word list cannot be empty")
    return (today - base_date).days % word_count


def daily_word(words: Sequence[str], base_date: datetime.date, today: datetime.date) -> str:
    """Offline daily word, used when no authoritative daily source answers."""
    return words[daily_index(base_date, len(words), today)]


def random_word(words: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Endless mode: a uniformly random word of the list."""
    if not words:
        raise ValueError("Word list cannot be empty")
    return (rng or random).choice(words)
