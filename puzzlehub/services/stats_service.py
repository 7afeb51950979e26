"""
Stats Service

Derives win rate and the win distribution from raw per-user counters.
The same counter layout is incremented by the remote result service and
by the local store for anonymous players, so one aggregator serves both.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from ..config.game_settings import MAX_GUESS_COUNT, MAX_MISTAKES
from ..models.game import EventKind, GameKind
from ..models.progress import PendingEvent
from ..models.stats import GameStats


@dataclass(frozen=True)
class CounterSchema:
    played: str
    completed: str
    failed: Optional[str] = None
    bucket_prefix: Optional[str] = None
    bucket_detail: Optional[str] = None
    bucket_min: int = 0
    bucket_max: int = -1

    def bucket_names(self):
        if not self.bucket_prefix:
            return []
        return [f"{self.bucket_prefix}{n}" for n in range(self.bucket_min, self.bucket_max + 1)]


COUNTER_SCHEMAS: Dict[GameKind, CounterSchema] = {
    GameKind.WORDLE: CounterSchema(
        played='games_played', completed='wordles_completed', failed='wordles_failed',
        bucket_prefix='wordle_in_', bucket_detail='guessCount', bucket_min=1, bucket_max=MAX_GUESS_COUNT,
    ),
    GameKind.CONNECTIONS: CounterSchema(
        played='connections_games_played', completed='connections_completed',
        bucket_prefix='connections_in_', bucket_detail='mistakesUsed', bucket_min=0, bucket_max=MAX_MISTAKES,
    ),
    GameKind.STRANDS: CounterSchema(
        played='strands_games_played', completed='strands_completed',
    ),
}


def _count(counters: Dict, name: str) -> int:
    value = counters.get(name, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        return 0
    return int(value)


def summarize(game: GameKind, counters: Dict) -> GameStats:
    """Build a GameStats from raw counters; missing or bad counters count as 0."""
    schema = COUNTER_SCHEMAS[game]
    counters = counters if isinstance(counters, dict) else {}

    played = _count(counters, schema.played)
    completed = _count(counters, schema.completed)
    win_rate = round(completed / played * 100) if played > 0 else 0

    return GameStats(
        game=game,
        games_played=played,
        completed=completed,
        win_rate=win_rate,
        distribution={name: _count(counters, name) for name in schema.bucket_names()},
    )


def increments_for(event: PendingEvent) -> Dict[str, int]:
    """Counter increments one terminal result contributes."""
    schema = COUNTER_SCHEMAS[event.game]
    increments = {schema.played: 1}

    if event.kind == EventKind.LOSS:
        if schema.failed:
            increments[schema.failed] = 1
        return increments

    increments[schema.completed] = 1
    if schema.bucket_prefix:
        bucket = event.detail.get(schema.bucket_detail)
        if bucket is not None and schema.bucket_min <= bucket <= schema.bucket_max:
            increments[f"{schema.bucket_prefix}{bucket}"] = 1
    return increments


def apply_event(counters: Dict[str, int], event: PendingEvent) -> Dict[str, int]:
    """New counters with one terminal result added."""
    updated = dict(counters)
    for name, amount in increments_for(event).items():
        updated[name] = _count(updated, name) + amount
    return updated


class StatsSource(Protocol):
    async def get_stats(self, game: GameKind) -> Dict:
        ...


async def fetch_remote_stats(game: GameKind, remote: StatsSource) -> GameStats:
    """Ask the remote result service for raw counters and summarize them."""
    payload = await remote.get_stats(game)
    return summarize(game, payload.get('counters', payload))
