"""
Points Ledger

Applies point deltas to a user's balance:
- Activity completion: +activity points
- Token conversion spend: -points spent

Leveling Curve:
- Every 100 points is one level, starting at level 1
- Level follows the current balance, so spending can lower it

The ledger performs no bounds check. Callers that spend points must verify
the balance first; a negative delta larger than the balance drives points
below zero.
"""

from typing import Dict
import logging

from wellness.db.store import Storage
from wellness.exceptions import RecordNotFoundError
from wellness.models import User

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 100


def calculate_level_from_points(points: int) -> int:
    """Level for a point balance (never below 1)"""
    return max(1, points // POINTS_PER_LEVEL + 1)


def get_level_progress(points: int) -> Dict[str, int]:
    """
    Progress toward the next level

    Returns:
        {
            'current_level': int,
            'points_in_level': int,
            'points_to_next_level': int,
            'next_level_threshold': int
        }
    """
    level = calculate_level_from_points(points)
    level_floor = (level - 1) * POINTS_PER_LEVEL
    next_threshold = level * POINTS_PER_LEVEL
    points_in_level = max(0, points - level_floor)

    return {
        "current_level": level,
        "points_in_level": points_in_level,
        "points_to_next_level": next_threshold - max(points, level_floor),
        "next_level_threshold": next_threshold,
    }


async def apply_points_delta(store: Storage, user_id: int, delta: int) -> User:
    """
    Add delta (may be negative) to the user's points and persist it

    Args:
        store: Entity store
        user_id: User ID
        delta: Points to add; negative for spends

    Returns:
        Updated user

    Raises:
        RecordNotFoundError: If the user does not exist
    """
    user = await store.get_user(user_id)
    if user is None:
        raise RecordNotFoundError(
            message=f"User {user_id} not found",
            record_type="User",
            record_id=user_id,
            user_id=user_id,
            operation="apply_points_delta",
        )

    old_level = user.level
    new_points = user.points + delta
    new_level = calculate_level_from_points(new_points)

    updated = await store.update_user(user_id, points=new_points, level=new_level)

    logger.info(
        f"Applied {delta:+d} points to user {user_id}. "
        f"Total: {new_points}, Level: {new_level}"
    )

    if new_level > old_level:
        logger.info(f"User {user_id} leveled up from {old_level} to {new_level}!")
    if new_points < 0:
        logger.warning(f"User {user_id} balance is negative: {new_points}")

    return updated
