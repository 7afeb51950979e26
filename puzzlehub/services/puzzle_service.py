"""
Puzzle Service

Thin proxy in front of the upstream daily puzzle feed. Payloads are
validated structurally before they are cached or served; the Strands
answer key stays on the server and backs word classification.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Optional, Tuple

import requests

from ..exceptions import UpstreamMalformed, UpstreamUnavailable
from ..models.game import GameKind, WordKind
from ..models.puzzle import parse_connections_puzzle, parse_strands_puzzle, parse_wordle_puzzle

FetchJson = Callable[[str], Any]

# Three games a day for about a month
MAX_CACHED_PUZZLES = 96

PUZZLE_PARSERS = {
    GameKind.WORDLE: parse_wordle_puzzle,
    GameKind.CONNECTIONS: parse_connections_puzzle,
    GameKind.STRANDS: parse_strands_puzzle,
}


@dataclass(frozen=True)
class StrandsAnswerKey:
    theme_words: FrozenSet[str]
    spangram: str

    def classify(self, word: str) -> WordKind:
        normalized = word.strip().upper()
        if normalized == self.spangram:
            return WordKind.SPANGRAM
        if normalized in self.theme_words:
            return WordKind.THEME
        return WordKind.OTHER


def parse_strands_answer_key(payload: Any) -> StrandsAnswerKey:
    if not isinstance(payload, dict):
        raise UpstreamMalformed("Strands payload must be a JSON object")
    theme_words = payload.get('themeWords')
    spangram = payload.get('spangram')
    if not isinstance(theme_words, list) or not all(isinstance(w, str) for w in theme_words):
        raise UpstreamMalformed("Strands payload has no theme words")
    if not isinstance(spangram, str) or not spangram.strip():
        raise UpstreamMalformed("Strands payload has no spangram")
    return StrandsAnswerKey(
        theme_words=frozenset(w.strip().upper() for w in theme_words),
        spangram=spangram.strip().upper(),
    )


class PuzzleService:
    """
    Fetches, validates and caches one puzzle per (game, date).

    Only validated payloads are cached, so a bad upstream answer is
    retried on the next request. Both caches keep the most recently
    fetched ``max_cached`` entries.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 10.0, fetch_json: Optional[FetchJson] = None,
                 max_cached: int = MAX_CACHED_PUZZLES):
        self.base_url = base_url.rstrip('/')
        self.timeout_seconds = timeout_seconds
        self.max_cached = max_cached
        self._fetch_json = fetch_json or self._http_fetch_json
        self._cache: "OrderedDict[Tuple[GameKind, str], Any]" = OrderedDict()
        self._answer_keys: "OrderedDict[str, StrandsAnswerKey]" = OrderedDict()

    def _remember(self, cache: OrderedDict, key, value) -> None:
        cache[key] = value
        cache.move_to_end(key)
        while len(cache) > self.max_cached:
            cache.popitem(last=False)

    def _http_fetch_json(self, url: str) -> Any:
        try:
            resp = requests.get(
                url,
                headers={'User-Agent': 'puzzlehub/1.0', 'Accept': 'application/json'},
                timeout=self.timeout_seconds
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"Failed to fetch upstream: {e}")

        if resp.status_code != 200:
            raise UpstreamUnavailable("Upstream error", status=resp.status_code)
        try:
            return resp.json()
        except ValueError:
            raise UpstreamMalformed("Upstream returned invalid JSON")

    def upstream_url(self, game: GameKind, date: str) -> str:
        return f"{self.base_url}/{game.value}/v2/{date}.json"

    def get_puzzle(self, game: GameKind, date: str):
        """
        Validated puzzle definition for a date.

        Raises:
            UpstreamUnavailable: Upstream unreachable or non-200
            UpstreamMalformed: Upstream payload failed validation
        """
        key = (game, date)
        if key in self._cache:
            return self._cache[key]

        payload = self._fetch_json(self.upstream_url(game, date))
        puzzle = PUZZLE_PARSERS[game](payload, date)
        if game == GameKind.STRANDS:
            self._remember(self._answer_keys, date, parse_strands_answer_key(payload))

        self._remember(self._cache, key, puzzle)
        return puzzle

    def classify_strands_word(self, date: str, word: str) -> WordKind:
        """Classify a traced word against the day's answer key."""
        if date not in self._answer_keys:
            self._cache.pop((GameKind.STRANDS, date), None)
            self.get_puzzle(GameKind.STRANDS, date)
        return self._answer_keys[date].classify(word)


# Global service instance
_puzzle_service = None


def get_puzzle_service() -> Optional[PuzzleService]:
    """Get the global puzzle service instance."""
    return _puzzle_service


def initialize_puzzle_service(base_url: str, timeout_seconds: float = 10.0,
                              fetch_json: Optional[FetchJson] = None) -> PuzzleService:
    """Initialize the global puzzle service instance."""
    global _puzzle_service
    _puzzle_service = PuzzleService(base_url, timeout_seconds, fetch_json)
    return _puzzle_service
