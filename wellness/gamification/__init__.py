"""
Gamification engine for the wellness tracker

Turns raw user actions into derived progression state:
- Points ledger and levels
- Daily login streaks
- Activity-count achievements
"""

from wellness.gamification.points_ledger import apply_points_delta, calculate_level_from_points, get_level_progress
from wellness.gamification.streak_system import touch_login
from wellness.gamification.achievement_system import (
    evaluate_after_completion,
    get_user_achievements_with_details,
    get_achievement_progress,
)

__all__ = [
    "apply_points_delta",
    "calculate_level_from_points",
    "get_level_progress",
    "touch_login",
    "evaluate_after_completion",
    "get_user_achievements_with_details",
    "get_achievement_progress",
]
