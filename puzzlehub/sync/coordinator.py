"""
Sync Coordinator

Decides where progress snapshots and terminal results go for the current
sign-in state, and forwards everything queued locally once the player
signs in.

    unknown     nothing is persisted; callers wait for the auth check
    signed_out  progress -> local store, results -> local pending queue
    signed_in   progress -> remote (best effort), results -> remote,
                falling back to the local queue when the remote is down
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Protocol

from ..exceptions import UpstreamUnavailable
from ..models.game import EventKind, GameKind
from ..models.progress import PendingEvent
from ..models.stats import GameStats
from ..services import stats_service
from ..sessions.base import GameSession
from ..storage.local_store import LocalStore
from ..utils.game_logger import game_logger
from .auth_state import AuthState
from .flush import FlushResult, flush


class RemoteResultService(Protocol):
    async def get_progress(self, game: GameKind, date: str):
        ...

    async def set_progress(self, snapshot) -> None:
        ...

    async def record_result(self, event: PendingEvent) -> None:
        ...

    async def get_stats(self, game: GameKind) -> Dict:
        ...


class SaveOutcome(Enum):
    SKIPPED = "skipped"   # auth still unknown
    LOCAL = "local"
    REMOTE = "remote"
    FAILED = "failed"     # remote write not delivered


@dataclass
class FlushReport:
    progress: Dict[GameKind, FlushResult] = field(default_factory=dict)
    events: Dict[GameKind, FlushResult] = field(default_factory=dict)

    @property
    def total(self) -> FlushResult:
        result = FlushResult()
        for part in list(self.progress.values()) + list(self.events.values()):
            result = result + part
        return result


class SyncCoordinator:
    """Persistence policy for one player session."""

    def __init__(self, store: LocalStore, remote: RemoteResultService, auth: Optional[AuthState] = None):
        self.store = store
        self.remote = remote
        self._auth = auth or AuthState.unknown()

    @property
    def auth(self) -> AuthState:
        return self._auth

    async def set_auth(self, state: AuthState) -> Optional[FlushReport]:
        """
        Apply a new sign-in state.

        Entering signed_in from any other state flushes local queues and
        returns the report; every other transition returns None.
        """
        previous = self._auth
        self._auth = state
        if state.is_signed_in and not previous.is_signed_in:
            game_logger.log_sync_event('signed_in', user_id=state.user_id, previous=previous.status.value)
            return await self.flush_all()
        return None

    async def flush_all(self) -> FlushReport:
        """Forward cached progress, then pending results, for every game."""
        report = FlushReport()
        if not self._auth.is_signed_in:
            return report

        async def send_progress(snapshot) -> bool:
            await self.remote.set_progress(snapshot)
            return True

        async def send_event(event: PendingEvent) -> bool:
            await self.remote.record_result(event)
            return True

        for game in GameKind:
            report.progress[game] = await flush(self.store.progress_queue(game), send_progress)
        for game in GameKind:
            report.events[game] = await flush(self.store.pending_queue(game), send_event)

        total = report.total
        game_logger.log_sync_event('flush', success=total.remaining == 0, user_id=self._auth.user_id,
                                   flushed=total.flushed, remaining=total.remaining)
        return report

    async def save_progress(self, snapshot) -> SaveOutcome:
        if not self._auth.is_known:
            return SaveOutcome.SKIPPED

        if not self._auth.is_signed_in:
            self.store.write_progress(snapshot)
            return SaveOutcome.LOCAL

        try:
            await self.remote.set_progress(snapshot)
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('save_progress', success=False, user_id=self._auth.user_id,
                                       game=snapshot.game.value, date=snapshot.date, error=str(e))
            return SaveOutcome.FAILED
        return SaveOutcome.REMOTE

    async def save_session(self, session: GameSession) -> SaveOutcome:
        """Persist a session's snapshot; endless sessions are never saved."""
        if not session.daily:
            return SaveOutcome.SKIPPED
        return await self.save_progress(session.snapshot())

    async def load_progress(self, game: GameKind, date: str):
        """Latest snapshot for a date; signed-in players fall back to the local cache."""
        if not self._auth.is_known:
            return None
        if not self._auth.is_signed_in:
            return self.store.read_progress(game, date)

        try:
            snapshot = await self.remote.get_progress(game, date)
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('load_progress', success=False, user_id=self._auth.user_id,
                                       game=game.value, date=date, error=str(e))
            return self.store.read_progress(game, date)
        return snapshot if snapshot is not None else self.store.read_progress(game, date)

    def local_stats(self, game: GameKind) -> GameStats:
        return stats_service.summarize(game, self.store.read_counters(game))

    def _queue_locally(self, event: PendingEvent) -> None:
        self.store.pending_queue(event.game).append(event)
        game_logger.log_game_event(event.game.value, 'result_queued', result=event.kind.value, date=event.date)

    async def record_result(self, session: GameSession) -> Optional[GameStats]:
        """
        Record a finished game's result once and return fresh stats.

        Returns None for endless sessions, while the game is in play, while
        auth is unknown (the one-shot guard is left untouched so the caller
        can retry), after the result was already recorded, or when
        signed-in stats could not be fetched.
        """
        if not session.daily or not session.is_done or not self._auth.is_known:
            return None
        if not session.claim_result():
            return None

        event = session.terminal_event()
        event_name = 'game_won' if event.kind == EventKind.WIN else 'game_lost'

        if not self._auth.is_signed_in:
            self._queue_locally(event)
            counters = stats_service.apply_event(self.store.read_counters(event.game), event)
            self.store.write_counters(event.game, counters)
            game_logger.log_game_event(event.game.value, event_name, date=event.date, **event.detail)
            return stats_service.summarize(event.game, counters)

        user_id = self._auth.user_id
        try:
            await self.remote.record_result(event)
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('record_result', success=False, user_id=user_id,
                                       game=event.game.value, error=str(e))
            self._queue_locally(event)
            return None

        game_logger.log_game_event(event.game.value, event_name, user_id=user_id, date=event.date, **event.detail)
        try:
            return await stats_service.fetch_remote_stats(event.game, self.remote)
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('fetch_stats', success=False, user_id=user_id,
                                       game=event.game.value, error=str(e))
            return None
