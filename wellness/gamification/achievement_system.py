"""
Achievement System

Awards catalog achievements from a user's activity-completion history.

Each achievement carries a rule parsed from its condition string
("<activityType>_<N>_<days|sessions>"). A rule is satisfied when the user
has at least N completions of activities of that type ("any" matches every
type). "days" rules are counted exactly like "sessions" rules.

Features:
- Automatic detection and awarding after each completion
- At most one unlock record per (user, achievement)
- Progress tracking for locked achievements

Bonus points are descriptive only: unlocking does not credit the ledger.
"""

from typing import Dict, List
from collections import Counter
import logging

from wellness.db.store import Storage
from wellness.models import Achievement, Activity, UserAchievementWithDetails

logger = logging.getLogger(__name__)


async def evaluate_after_completion(
    store: Storage,
    user_id: int,
    completed_activity: Activity
) -> List[Achievement]:
    """
    Check if the user unlocked any achievements after completing an activity

    Args:
        store: Entity store
        user_id: User ID
        completed_activity: Activity that was just completed

    Returns:
        Newly unlocked achievements (possibly empty)
    """
    newly_unlocked = []

    type_counts = await _count_completions_by_type(store, user_id)

    # Get user's already unlocked achievements
    user_achievements = await store.get_user_achievements_by_user_id(user_id)
    unlocked_ids = {ua.achievement_id for ua in user_achievements}

    for achievement in await store.get_achievements():
        # Skip if already unlocked
        if achievement.id in unlocked_ids:
            continue

        count = _count_matching(achievement, type_counts)
        if count < achievement.rule.threshold:
            continue

        await store.create_user_achievement(user_id, achievement.id)
        unlocked_ids.add(achievement.id)
        newly_unlocked.append(achievement)

        logger.info(
            f"User {user_id} unlocked achievement: {achievement.condition} "
            f"({achievement.name}) after completing {completed_activity.name}"
        )

    return newly_unlocked


async def get_user_achievements_with_details(
    store: Storage,
    user_id: int
) -> List[UserAchievementWithDetails]:
    """
    Get user's unlock records, each joined to its achievement

    Returns:
        Unlock records sorted by unlock date (most recent first)
    """
    details = []
    for user_achievement in await store.get_user_achievements_by_user_id(user_id):
        achievement = await store.get_achievement(user_achievement.achievement_id)
        details.append(UserAchievementWithDetails(
            **user_achievement.model_dump(),
            achievement=achievement,
        ))
    return details


async def get_achievement_progress(store: Storage, user_id: int) -> List[Dict]:
    """
    Calculate progress toward every achievement the user has not unlocked

    Returns:
        [
            {
                'achievement': Achievement,
                'current': int,
                'required': int,
                'percentage': int
            }
        ]
        sorted by progress (closest to completion first)
    """
    type_counts = await _count_completions_by_type(store, user_id)
    unlocked_ids = {
        ua.achievement_id
        for ua in await store.get_user_achievements_by_user_id(user_id)
    }

    locked = []
    for achievement in await store.get_achievements():
        if achievement.id in unlocked_ids:
            continue

        required = achievement.rule.threshold
        current = min(_count_matching(achievement, type_counts), required)
        locked.append({
            "achievement": achievement,
            "current": current,
            "required": required,
            "percentage": int(current / required * 100),
        })

    locked.sort(key=lambda x: x["percentage"], reverse=True)
    return locked


# ============================================
# Helpers
# ============================================

async def _count_completions_by_type(store: Storage, user_id: int) -> Counter:
    """Number of the user's completion records per activity type"""
    activity_types = {a.id: a.type.value for a in await store.get_activities()}
    history = await store.get_user_activities_by_user_id(user_id)

    counts: Counter = Counter()
    for record in history:
        activity_type = activity_types.get(record.activity_id)
        if activity_type is None:
            logger.warning(
                f"Completion {record.id} references unknown activity {record.activity_id}"
            )
            continue
        counts[activity_type] += 1
    return counts


def _count_matching(achievement: Achievement, type_counts: Counter) -> int:
    return sum(n for activity_type, n in type_counts.items() if achievement.rule.matches(activity_type))
