"""Domain models for the wellness tracker"""
from wellness.models.user import User
from wellness.models.mood import Mood, MoodType
from wellness.models.activity import Activity, ActivityType, UserActivity
from wellness.models.achievement import (
    Achievement,
    AchievementRule,
    ConditionUnit,
    UserAchievement,
    UserAchievementWithDetails,
)
from wellness.models.chat import ChatMessage, ChatRole

__all__ = [
    "User",
    "Mood",
    "MoodType",
    "Activity",
    "ActivityType",
    "UserActivity",
    "Achievement",
    "AchievementRule",
    "ConditionUnit",
    "UserAchievement",
    "UserAchievementWithDetails",
    "ChatMessage",
    "ChatRole",
]
