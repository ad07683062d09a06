"""
MoodService - Mood logging and mood history queries
"""

import logging
from typing import List, Optional

from wellness.db.store import Storage
from wellness.models import Mood, MoodType
from wellness.monitoring.metrics import record_mood_logged

logger = logging.getLogger(__name__)


class MoodService:
    """Service for mood log entries"""

    def __init__(self, store: Storage):
        self.store = store

    async def log_mood(self, user_id: int, mood: MoodType, note: Optional[str] = None) -> Mood:
        """
        Record a mood for a user.

        Args:
            user_id: User ID
            mood: One of the fixed mood labels
            note: Optional free-text note

        Returns:
            Stored mood entry with server-assigned id and timestamp
        """
        entry = await self.store.create_mood(user_id, mood, note)
        record_mood_logged(entry.mood.value)
        logger.info(f"User {user_id} logged mood {entry.mood.value}")
        return entry

    async def list_moods(self, user_id: int) -> List[Mood]:
        """All mood entries, newest first"""
        return await self.store.get_moods_by_user_id(user_id)

    async def weekly_moods(self, user_id: int) -> List[Mood]:
        """Mood entries from the last 7 days, oldest first"""
        return await self.store.get_weekly_moods(user_id)
