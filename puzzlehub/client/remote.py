"""
Remote Result Client

Async HTTP client for the hub's API: puzzles, the sign-in check, per-game
progress, win/loss recording, stats, and Strands word classification.

Every call either returns parsed data or raises UpstreamUnavailable
(UpstreamMalformed for payloads that fail validation). Non-2xx answers and
network errors are both "not delivered". No timeout is imposed unless one
is configured.
"""

from __future__ import annotations

import asyncio
import datetime
from typing import Any, Dict, Optional

import aiohttp

from ..config.game_settings import WORD_LIST, WORDLE_BASE_DATE
from ..engines import wordle
from ..exceptions import StorageCorrupt, UpstreamMalformed, UpstreamUnavailable
from ..models.game import GameKind, WordKind
from ..models.progress import PendingEvent, progress_from_dict
from ..models.puzzle import (
    WordlePuzzle, parse_connections_puzzle, parse_strands_puzzle, parse_wordle_puzzle
)
from ..sync.auth_state import AuthState
from ..utils.game_logger import game_logger

PUZZLE_PARSERS = {
    GameKind.WORDLE: parse_wordle_puzzle,
    GameKind.CONNECTIONS: parse_connections_puzzle,
    GameKind.STRANDS: parse_strands_puzzle,
}


class RemoteResultClient:
    """
    Client for one player's session against the hub API.

    The session credential is sent as a bearer token. Pass an existing
    ``aiohttp.ClientSession`` to share connections; otherwise one is
    created on first use and closed by ``close()``.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self.token = token
        self._session = session
        self._owns_session = session is None
        self.timeout_seconds = timeout_seconds

    async def __aenter__(self) -> 'RemoteResultClient':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    def _headers(self) -> Dict[str, str]:
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with self._get_session().request(
                method, url, json=json, params=params, headers=self._headers()
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise UpstreamUnavailable(f"{method} {path} returned {resp.status}", status=resp.status)
                try:
                    return await resp.json(content_type=None)
                except ValueError:
                    raise UpstreamMalformed(f"{method} {path} returned invalid JSON", status=resp.status)
        except aiohttp.ClientError as e:
            raise UpstreamUnavailable(f"{method} {path} failed: {e}")
        except asyncio.TimeoutError:
            raise UpstreamUnavailable(f"{method} {path} timed out")

    # ------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------

    async def get_auth_state(self) -> AuthState:
        """Resolve the sign-in flag; an unreachable check counts as signed out."""
        try:
            data = await self._request('GET', '/api/auth/me')
        except UpstreamUnavailable as e:
            game_logger.log_sync_event('auth_check', success=False, error=str(e))
            return AuthState.signed_out()

        user = data.get('user') if isinstance(data, dict) else None
        if isinstance(data, dict) and data.get('signedIn') and isinstance(user, dict) and user.get('id'):
            return AuthState.signed_in(str(user['id']))
        return AuthState.signed_out()

    # ------------------------------------------------------------
    # Puzzles
    # ------------------------------------------------------------

    async def fetch_puzzle(self, game: GameKind, date: str):
        """Fetch and structurally validate the puzzle of one date."""
        data = await self._request('GET', f"/api/{game.value}/{date}")
        if isinstance(data, dict) and isinstance(data.get('puzzle'), dict):
            data = data['puzzle']
        return PUZZLE_PARSERS[game](data, date)

    async def classify_word(self, date: str, word: str) -> WordKind:
        data = await self._request('POST', '/api/strands/submit', json={'date': date, 'word': word})
        try:
            return WordKind(data.get('kind'))
        except (AttributeError, ValueError):
            raise UpstreamMalformed("Invalid word classification response")

    # ------------------------------------------------------------
    # Progress, results, stats
    # ------------------------------------------------------------

    async def get_progress(self, game: GameKind, date: str):
        """Stored snapshot for a date, or None when the service has none."""
        data = await self._request('GET', f"/api/{game.value}/progress", params={'date': date})
        record = data.get('progress') if isinstance(data, dict) else None
        if record is None:
            return None
        try:
            return progress_from_dict(game, record)
        except StorageCorrupt as e:
            raise UpstreamMalformed(f"Invalid progress payload: {e}")

    async def set_progress(self, snapshot) -> None:
        await self._request('POST', f"/api/{snapshot.game.value}/progress", json=snapshot.to_dict())

    async def record_result(self, event: PendingEvent) -> None:
        await self._request('POST', f"/api/{event.game.value}/{event.kind.value}", json=event.payload())

    async def get_stats(self, game: GameKind) -> Dict[str, Any]:
        data = await self._request('GET', f"/api/{game.value}/stats")
        if not isinstance(data, dict):
            raise UpstreamMalformed("Invalid stats payload")
        return data


async def load_daily_wordle(client: RemoteResultClient, date: str) -> WordlePuzzle:
    """
    The Wordle puzzle of a date, falling back to the offline rotation when
    the daily source cannot be reached.
    """
    try:
        return await client.fetch_puzzle(GameKind.WORDLE, date)
    except UpstreamUnavailable as e:
        game_logger.log_sync_event('daily_word_fallback', success=False, date=date, error=str(e))
        day = datetime.date.fromisoformat(date)
        return WordlePuzzle(date=date, solution=wordle.daily_word(WORD_LIST, WORDLE_BASE_DATE, day))
