"""
Session State Base

In-memory state of one puzzle instance, owned by the active game screen.
"""

from typing import Optional

from ..models.game import EventKind, GameKind
from ..models.progress import PendingEvent


class GameSession:
    """
    Shared behaviour of every per-puzzle session.

    Subclasses implement ``is_done``, ``is_won``, ``snapshot``, ``restore``
    and ``_win_detail``.
    """

    game: GameKind

    # Only daily puzzles are persisted and counted in stats
    daily = True

    def __init__(self, date: str):
        self.date = date
        self._result_claimed = False

    @property
    def is_done(self) -> bool:
        raise NotImplementedError

    @property
    def is_won(self) -> bool:
        raise NotImplementedError

    def snapshot(self):
        raise NotImplementedError

    def restore(self, snapshot) -> bool:
        raise NotImplementedError

    def _win_detail(self) -> dict:
        return {}

    def terminal_event(self) -> Optional[PendingEvent]:
        """The finished game's result, or None while it is still in play."""
        if not self.is_done:
            return None
        if self.is_won:
            return PendingEvent(game=self.game, kind=EventKind.WIN, date=self.date, detail=self._win_detail())
        return PendingEvent(game=self.game, kind=EventKind.LOSS, date=self.date)

    @property
    def result_recorded(self) -> bool:
        return self._result_claimed

    def claim_result(self) -> bool:
        """One-shot guard: True only the first time a finished game asks."""
        if self._result_claimed or not self.is_done:
            return False
        self._result_claimed = True
        return True
