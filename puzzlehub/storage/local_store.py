"""
Local Durable Store

Per-date progress snapshots, the pending terminal-result queue and the
anonymous stats counters, kept in an injected key-value store.

Reads never raise: a missing, unparsable or out-of-range record reads as
absent and is logged. Writes replace whole values.

Layout (all JSON):
    <game>_progress_v1   {date: progress record}
    <game>_events_v1     [pending event, ...]   oldest first
    <game>_counters_v1   {counter name: int}
"""

import json
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_PROGRESS_ENTRIES
from ..exceptions import InputInvalid, StorageCorrupt
from ..models.game import GameKind
from ..models.progress import PendingEvent, progress_from_dict
from ..utils.game_logger import game_logger
from ..utils.helpers import is_valid_date
from .kv import KeyValueStore


def _progress_key(game: GameKind) -> str:
    return f"{game.value}_progress_v1"


def _events_key(game: GameKind) -> str:
    return f"{game.value}_events_v1"


def _counters_key(game: GameKind) -> str:
    return f"{game.value}_counters_v1"


class LocalStore:
    """Validated view over the key-value store. Owned by the sync coordinator."""

    def __init__(self, kv: KeyValueStore, max_progress_entries: int = MAX_PROGRESS_ENTRIES):
        self.kv = kv
        self.max_progress_entries = max_progress_entries

    # ------------------------------------------------------------
    # Raw JSON access
    # ------------------------------------------------------------

    def _read_json(self, key: str) -> Any:
        raw = self.kv.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (ValueError, RecursionError):
            game_logger.log_sync_event('discard_local_record', success=False, key=key, reason='invalid json')
            return None

    def _write_json(self, key: str, value: Any) -> None:
        self.kv.set(key, json.dumps(value, ensure_ascii=False))

    # ------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------

    def _read_progress_map(self, game: GameKind) -> Dict[str, Any]:
        raw = self._read_json(_progress_key(game))
        if not isinstance(raw, dict):
            return {}

        snapshots = {}
        for date, record in raw.items():
            try:
                snapshot = progress_from_dict(game, record)
            except StorageCorrupt as e:
                game_logger.log_sync_event('discard_local_record', success=False,
                                           game=game.value, date=date, reason=str(e))
                continue
            if snapshot.date != date:
                continue
            snapshots[date] = snapshot
        return snapshots

    def _write_progress_map(self, game: GameKind, snapshots: Dict[str, Any]) -> None:
        # Keep only the most recently updated dates
        newest = sorted(snapshots.values(), key=lambda s: s.updated_at, reverse=True)
        kept = newest[:self.max_progress_entries]
        self._write_json(_progress_key(game), {s.date: s.to_dict() for s in kept})

    def read_progress(self, game: GameKind, date: str):
        """Stored snapshot for a date, or None when absent or corrupt."""
        if not is_valid_date(date):
            return None
        return self._read_progress_map(game).get(date)

    def write_progress(self, snapshot) -> None:
        """
        Replace the snapshot stored for the snapshot's date.

        Raises:
            InputInvalid: The snapshot would not read back as valid
        """
        game = snapshot.game
        try:
            progress_from_dict(game, snapshot.to_dict())
        except StorageCorrupt as e:
            raise InputInvalid(f"Refusing to store invalid progress: {e}")

        snapshots = self._read_progress_map(game)
        snapshots[snapshot.date] = snapshot
        self._write_progress_map(game, snapshots)

    def delete_progress(self, game: GameKind, date: Optional[str] = None) -> None:
        """Forget one date, or every date when ``date`` is None."""
        if date is None:
            self.kv.delete(_progress_key(game))
            return
        snapshots = self._read_progress_map(game)
        if snapshots.pop(date, None) is not None:
            self._write_progress_map(game, snapshots)

    def list_progress(self, game: GameKind) -> List[Any]:
        """All stored snapshots, oldest date first."""
        return sorted(self._read_progress_map(game).values(), key=lambda s: s.date)

    def progress_queue(self, game: GameKind) -> 'ProgressQueue':
        return ProgressQueue(self, game)

    # ------------------------------------------------------------
    # Pending events
    # ------------------------------------------------------------

    def _read_events(self, game: GameKind) -> List[PendingEvent]:
        raw = self._read_json(_events_key(game))
        if not isinstance(raw, list):
            return []

        events = []
        for record in raw:
            try:
                events.append(PendingEvent.from_dict(game, record))
            except StorageCorrupt as e:
                game_logger.log_sync_event('discard_local_record', success=False,
                                           game=game.value, reason=str(e))
        return events

    def _write_events(self, game: GameKind, events: List[PendingEvent]) -> None:
        if events:
            self._write_json(_events_key(game), [e.to_dict() for e in events])
        else:
            self.kv.delete(_events_key(game))

    def pending_queue(self, game: GameKind) -> 'EventQueue':
        return EventQueue(self, game)

    # ------------------------------------------------------------
    # Anonymous stats counters
    # ------------------------------------------------------------

    def read_counters(self, game: GameKind) -> Dict[str, int]:
        raw = self._read_json(_counters_key(game))
        if not isinstance(raw, dict):
            return {}
        return {
            name: value for name, value in raw.items()
            if isinstance(name, str) and isinstance(value, int) and not isinstance(value, bool) and value >= 0
        }

    def write_counters(self, game: GameKind, counters: Dict[str, int]) -> None:
        self._write_json(_counters_key(game), dict(counters))


class EventQueue:
    """Ordered queue of one game's pending terminal results."""

    def __init__(self, store: LocalStore, game: GameKind):
        self.store = store
        self.game = game

    def items(self) -> List[PendingEvent]:
        return self.store._read_events(self.game)

    def __len__(self) -> int:
        return len(self.items())

    def append(self, event: PendingEvent) -> None:
        if event.game != self.game:
            raise InputInvalid(f"{event.game.value} event pushed onto the {self.game.value} queue")
        events = self.items()
        events.append(event)
        self.store._write_events(self.game, events)

    def drain(self) -> List[PendingEvent]:
        """Remove and return everything queued, oldest first."""
        events = self.items()
        self.store._write_events(self.game, [])
        return events

    def restore(self, events: List[PendingEvent]) -> None:
        """Put undelivered events back ahead of anything queued since the drain."""
        if events:
            self.store._write_events(self.game, list(events) + self.items())

    def clear(self) -> None:
        self.store._write_events(self.game, [])


class ProgressQueue:
    """One game's cached snapshots seen as a queue, oldest date first."""

    def __init__(self, store: LocalStore, game: GameKind):
        self.store = store
        self.game = game

    def items(self) -> List[Any]:
        return self.store.list_progress(self.game)

    def __len__(self) -> int:
        return len(self.items())

    def drain(self) -> List[Any]:
        snapshots = self.items()
        self.store.delete_progress(self.game)
        return snapshots

    def restore(self, snapshots: List[Any]) -> None:
        """Put undelivered snapshots back unless a newer one for that date was saved meanwhile."""
        if not snapshots:
            return
        current = self.store._read_progress_map(self.game)
        for snapshot in snapshots:
            current.setdefault(snapshot.date, snapshot)
        self.store._write_progress_map(self.game, current)
