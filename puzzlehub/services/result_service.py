"""
Result Service

Server side of the remote result store: per-user, per-game progress
documents and lifetime counters in MongoDB.

Progress writes are merges keyed by (user, game, date) and result writes
are counter increments, so re-delivering a write from a retried flush
never corrupts a document.
"""

import datetime
from typing import Any, Dict, Optional

from pymongo import ASCENDING
from pymongo.database import Database

from ..exceptions import StorageCorrupt
from ..models.game import GameKind
from ..models.progress import PendingEvent, progress_from_dict
from ..models.stats import GameStats
from . import stats_service


class ResultService:
    """
    Persists progress snapshots and win/loss counters per user.

    Collections:
        progress    one document per (user_id, game, date)
        user_stats  one document per user id holding every game's counters
    """

    def __init__(self, db: Database):
        self.progress_collection = db.progress
        self.stats_collection = db.user_stats

        self.progress_collection.create_index(
            [("user_id", ASCENDING), ("game", ASCENDING), ("date", ASCENDING)],
            unique=True
        )

    def get_progress(self, user_id: str, game: GameKind, date: str):
        """
        Stored snapshot for one date, or None.

        A stored document that no longer validates is treated as absent.
        """
        doc = self.progress_collection.find_one(
            {"user_id": user_id, "game": game.value, "date": date},
            {"_id": False, "user_id": False, "game": False}
        )
        if not doc:
            return None
        try:
            return progress_from_dict(game, doc)
        except StorageCorrupt:
            return None

    def set_progress(self, user_id: str, snapshot) -> None:
        """Merge a snapshot into the user's document for that date."""
        fields = snapshot.to_dict()
        fields["serverUpdatedAt"] = datetime.datetime.now(datetime.timezone.utc).isoformat()

        self.progress_collection.update_one(
            {"user_id": user_id, "game": snapshot.game.value, "date": snapshot.date},
            {"$set": fields},
            upsert=True
        )

    def record_result(self, user_id: str, event: PendingEvent) -> Dict[str, int]:
        """Increment the counters one terminal result contributes."""
        increments = stats_service.increments_for(event)
        self.stats_collection.update_one(
            {"_id": user_id},
            {"$inc": increments},
            upsert=True
        )
        return increments

    def get_counters(self, user_id: str, game: GameKind) -> Dict[str, Any]:
        """Raw counters of one game for a user (zeros when never played)."""
        schema = stats_service.COUNTER_SCHEMAS[game]
        names = [schema.played, schema.completed] + schema.bucket_names()
        if schema.failed:
            names.append(schema.failed)

        doc = self.stats_collection.find_one({"_id": user_id}) or {}
        return {name: doc.get(name, 0) for name in names}

    def get_stats(self, user_id: str, game: GameKind) -> GameStats:
        return stats_service.summarize(game, self.get_counters(user_id, game))


# Global service instance
_result_service = None


def get_result_service() -> Optional[ResultService]:
    """Get the global result service instance."""
    return _result_service


def initialize_result_service(db: Database) -> ResultService:
    """Initialize the global result service instance."""
    global _result_service
    _result_service = ResultService(db)
    return _result_service
