"""
Game Configuration Constants Module

Defines the rule constants shared by the evaluators, the session state,
the local store validators and the result service, plus the accepted
Wordle word lists for every supported word length.
"""

import datetime
import json
import os
from typing import Dict, Final, List

# Wordle
MAX_ROUNDS: Final[int] = 6
"""Number of guess rows per Wordle puzzle."""

DAILY_WORD_LENGTH: Final[int] = 5
ENDLESS_WORD_LENGTHS: Final[tuple] = (4, 5, 6)
MAX_WORD_LENGTH: Final[int] = 10
"""Upper bound on stored Wordle column counts."""

MAX_GUESS_COUNT: Final[int] = 10
"""Upper bound on the guess count a Wordle win may report."""

WORDLE_BASE_DATE: Final[datetime.date] = datetime.date(2021, 6, 19)
"""Day zero of the offline daily-word rotation."""

# Connections
GROUP_SIZE: Final[int] = 4
CATEGORY_COUNT: Final[int] = 4
MAX_MISTAKES: Final[int] = 4

# Strands
MIN_PATH_LENGTH: Final[int] = 2
MAX_PATH_LENGTH: Final[int] = 80
MAX_GRID_INDEX: Final[int] = 50

# Local store
MAX_PROGRESS_ENTRIES: Final[int] = 14
"""Most recently updated dates kept per game in the local progress cache."""


def _load_word_list(length: int) -> List[str]:
    """
    Load the accepted words of one length from words_<length>.json.

    Returns:
        List[str]: Lowercase words, all exactly ``length`` letters

    Raises:
        FileNotFoundError: If the word file is not found
        ValueError: If the word list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, f'words_{length}.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    lowercase_words = [word.strip().lower() for word in word_list]

    for word in lowercase_words:
        if len(word) != length:
            raise ValueError(f"Word '{word}' is not {length} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")

    return lowercase_words


WORDS_BY_LENGTH: Final[Dict[int, List[str]]] = {
    length: _load_word_list(length) for length in ENDLESS_WORD_LENGTHS
}

WORD_LIST: Final[List[str]] = WORDS_BY_LENGTH[DAILY_WORD_LENGTH]


def words_for_length(length: int) -> List[str]:
    """Accepted words of the given length, or an empty list."""
    return WORDS_BY_LENGTH.get(length, [])


def validate_word_list_integrity() -> bool:
    """
    Validates every loaded word list.

    Checks length, alphabet, lowercase format and uniqueness.

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    for length, words in WORDS_BY_LENGTH.items():
        if not words:
            raise ValueError(f"Word list for length {length} cannot be empty")

        for index, word in enumerate(words):
            if len(word) != length:
                raise ValueError(f"Word at index {index} '{word}' is not {length} characters long")
            if not word.isalpha():
                raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")
            if not word.islower():
                raise ValueError(f"Word at index {index} '{word}' is not in lowercase format")

        if len(words) != len(set(words)):
            duplicates = sorted({word for word in words if words.count(word) > 1})
            raise ValueError(f"Duplicate words found in {length}-letter list: {duplicates}")

    return True


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        for length, words in WORDS_BY_LENGTH.items():
            print(f" {length}-letter words: {len(words)}")
        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        raise SystemExit(1)
