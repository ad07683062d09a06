"""
ProgressionService - Progression Facade

Entry point the request layer calls for every action that changes a user's
progression state. Sequences completion record → points ledger → achievement
evaluation, and serializes those steps per user.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from wellness.db.store import Storage
from wellness.exceptions import RecordNotFoundError, ValidationError
from wellness.gamification import (
    apply_points_delta,
    evaluate_after_completion,
    get_achievement_progress,
    get_level_progress,
    get_user_achievements_with_details,
    touch_login,
)
from wellness.gamification.streak_system import format_streak_display
from wellness.models import Achievement, Activity, User, UserActivity, UserAchievementWithDetails
from wellness.monitoring.metrics import (
    record_achievement_unlock,
    record_activity_completion,
    record_points_spent,
)

logger = logging.getLogger(__name__)


class ProgressionService:
    """
    Service for progression state.

    Responsibilities:
    - Activity completion (record, points, achievements)
    - Login streaks
    - Point spending for token conversion
    - Progress and achievement queries

    Mutations for one user run inside that user's asyncio.Lock, so two
    concurrent completions cannot lose a points update or unlock the same
    achievement twice.
    """

    def __init__(self, store: Storage):
        """
        Initialize ProgressionService.

        Args:
            store: Entity store
        """
        self.store = store
        self._user_locks: Dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        logger.debug("ProgressionService initialized")

    def _lock_for(self, user_id: int) -> asyncio.Lock:
        return self._user_locks[user_id]

    async def get_user(self, user_id: int) -> User:
        """
        Get user by ID.

        Raises:
            RecordNotFoundError: If the user does not exist
        """
        user = await self.store.get_user(user_id)
        if user is None:
            raise RecordNotFoundError(
                message=f"User {user_id} not found",
                record_type="User",
                record_id=user_id,
                user_id=user_id,
            )
        return user

    async def get_activity(self, activity_id: int) -> Activity:
        """
        Get catalog activity by ID.

        Raises:
            RecordNotFoundError: If the activity does not exist
        """
        activity = await self.store.get_activity(activity_id)
        if activity is None:
            raise RecordNotFoundError(
                message=f"Activity {activity_id} not found",
                record_type="Activity",
                record_id=activity_id,
            )
        return activity

    async def complete_activity(self, user_id: int, activity_id: int) -> UserActivity:
        """
        Record that a user finished an activity and apply its effects.

        Steps:
        1. Look up the activity (and the user)
        2. Create the completion record
        3. Credit activity.points through the ledger
        4. Evaluate achievements

        A retry after a failure in step 3 or 4 creates a second completion
        record rather than repairing the first.

        Args:
            user_id: User ID
            activity_id: Catalog activity ID

        Returns:
            The completion record

        Raises:
            RecordNotFoundError: If the activity or user does not exist
        """
        activity = await self.get_activity(activity_id)
        await self.get_user(user_id)

        async with self._lock_for(user_id):
            completion = await self.store.create_user_activity(user_id, activity.id)
            await apply_points_delta(self.store, user_id, activity.points)
            unlocked = await evaluate_after_completion(self.store, user_id, activity)

        record_activity_completion(activity.type.value)
        for achievement in unlocked:
            record_achievement_unlock(achievement.condition)

        logger.info(
            f"User {user_id} completed {activity.name} (+{activity.points} points), "
            f"achievements unlocked: {len(unlocked)}"
        )

        return completion

    async def record_login(self, user_id: int, now: Optional[datetime] = None) -> User:
        """
        Register a login event and update the daily streak.

        Args:
            user_id: User ID
            now: Login time (defaults to current local time)

        Returns:
            Updated user
        """
        async with self._lock_for(user_id):
            return await touch_login(self.store, user_id, now=now)

    async def spend_points(self, user_id: int, points_spent: int) -> User:
        """
        Spend points for token conversion.

        The balance check lives here; the ledger itself accepts any delta.

        Args:
            user_id: User ID
            points_spent: Positive number of points to deduct

        Returns:
            Updated user

        Raises:
            ValidationError: If the amount is not positive or exceeds the balance
            RecordNotFoundError: If the user does not exist
        """
        if points_spent <= 0:
            raise ValidationError(
                message="Invalid points amount",
                field="points_spent",
                value=points_spent,
                user_id=user_id,
                operation="spend_points",
            )

        async with self._lock_for(user_id):
            user = await self.get_user(user_id)
            if user.points < points_spent:
                raise ValidationError(
                    message="Not enough points available",
                    field="points_spent",
                    value=points_spent,
                    user_id=user_id,
                    operation="spend_points",
                )
            updated = await apply_points_delta(self.store, user_id, -points_spent)

        record_points_spent(points_spent)
        logger.info(f"User {user_id} converted {points_spent} points")
        return updated

    async def list_activities(self) -> List[Activity]:
        return await self.store.get_activities()

    async def list_achievements(self) -> List[Achievement]:
        return await self.store.get_achievements()

    async def list_user_activities(self, user_id: int) -> List[UserActivity]:
        """Completion records, newest first"""
        return await self.store.get_user_activities_by_user_id(user_id)

    async def list_user_achievements(self, user_id: int) -> List[UserAchievementWithDetails]:
        """Unlock records joined with their achievements, newest first"""
        return await get_user_achievements_with_details(self.store, user_id)

    async def get_progress_summary(self, user_id: int) -> Dict[str, Any]:
        """
        Dashboard summary of a user's progression.

        Returns:
            {
                'user_id': int,
                'points': int,
                'level': int,
                'points_in_level': int,
                'points_to_next_level': int,
                'streak_days': int,
                'best_streak': int,
                'streak_message': str,
                'activities_completed': int,
                'achievements_unlocked': int,
                'bonus_points_earned': int,
                'next_achievements': list
            }
        """
        user = await self.get_user(user_id)
        level_info = get_level_progress(user.points)
        completions = await self.store.get_user_activities_by_user_id(user_id)
        unlocked = await get_user_achievements_with_details(self.store, user_id)
        locked = await get_achievement_progress(self.store, user_id)

        return {
            "user_id": user.id,
            "points": user.points,
            "level": user.level,
            "points_in_level": level_info["points_in_level"],
            "points_to_next_level": level_info["points_to_next_level"],
            "streak_days": user.streak_days,
            "best_streak": user.best_streak,
            "streak_message": format_streak_display(user),
            "activities_completed": len(completions),
            "achievements_unlocked": len(unlocked),
            # Display-only: bonus points are never credited to the balance
            "bonus_points_earned": sum(
                ua.achievement.bonus_points for ua in unlocked if ua.achievement
            ),
            "next_achievements": [
                {
                    "achievement_id": p["achievement"].id,
                    "name": p["achievement"].name,
                    "current": p["current"],
                    "required": p["required"],
                    "percentage": p["percentage"],
                }
                for p in locked[:3]
            ],
        }
