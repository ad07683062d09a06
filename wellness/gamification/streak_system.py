"""
Daily Login Streak System

A streak counts consecutive calendar days with at least one login.

Logic:
- Last login yesterday: streak + 1
- Last login today: unchanged
- Gap of 2+ days, or first login: reset to 1
- best_streak is raised whenever the current streak exceeds it
"""

from typing import Optional
from datetime import datetime, timedelta
import logging

from wellness.db.store import Storage
from wellness.exceptions import RecordNotFoundError
from wellness.models import User

logger = logging.getLogger(__name__)


async def touch_login(
    store: Storage,
    user_id: int,
    now: Optional[datetime] = None
) -> User:
    """
    Record a login event and advance the streak

    Day boundaries are local midnight; only calendar dates are compared.

    Args:
        store: Entity store
        user_id: User ID
        now: Login time (defaults to the current local time)

    Returns:
        Updated user

    Raises:
        RecordNotFoundError: If the user does not exist
    """
    if now is None:
        now = datetime.now()

    user = await store.get_user(user_id)
    if user is None:
        raise RecordNotFoundError(
            message=f"User {user_id} not found",
            record_type="User",
            record_id=user_id,
            user_id=user_id,
            operation="touch_login",
        )

    today = now.date()
    yesterday = today - timedelta(days=1)
    last_date = user.last_login.date() if user.last_login else None

    old_streak = user.streak_days
    if last_date == yesterday:
        new_streak = old_streak + 1
    elif last_date == today:
        new_streak = old_streak
    else:
        new_streak = 1
        if old_streak > 1:
            logger.info(
                f"User {user_id} streak broken. Was {old_streak}, "
                f"last login {last_date}"
            )

    updated = await store.update_user(
        user_id,
        streak_days=new_streak,
        best_streak=max(user.best_streak, new_streak),
        last_login=now,
    )

    logger.info(f"Updated login streak for user {user_id}: {old_streak} → {new_streak} days")

    return updated


def format_streak_display(user: User) -> str:
    """
    Format a user's streak for display

    Args:
        user: User with streak fields

    Returns:
        Single line such as "🔥 5-day streak (best: 9)"
    """
    if user.streak_days == 0:
        return "No streak yet. Log in each day to build one! 💪"

    line = f"🔥 {user.streak_days}-day streak"
    if user.best_streak > user.streak_days:
        line += f" (best: {user.best_streak})"
    return line
