"""Achievement models for gamification"""
from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

# Matches completions of every activity type
ANY_ACTIVITY = "any"


class ConditionUnit(str, Enum):
    """Unit suffix of an achievement condition string"""
    DAYS = "days"
    SESSIONS = "sessions"


class AchievementRule(BaseModel):
    """
    Parsed form of a condition string such as ``breathing_10_sessions``

    ``days`` rules are counted exactly like ``sessions`` rules: the threshold
    applies to the number of completions, not to distinct calendar days.
    """
    activity_type: str
    threshold: int = Field(ge=1)
    unit: ConditionUnit

    @classmethod
    def parse(cls, condition: str) -> "AchievementRule":
        """
        Parse ``<activityType>_<N>_<days|sessions>``

        Raises:
            ValueError: If the string does not have that shape
        """
        parts = condition.rsplit("_", 2)
        if len(parts) != 3 or not parts[0]:
            raise ValueError(f"Malformed achievement condition: {condition!r}")

        activity_type, threshold, unit = parts
        if not threshold.isdigit() or int(threshold) < 1:
            raise ValueError(f"Condition threshold must be a positive integer: {condition!r}")

        try:
            parsed_unit = ConditionUnit(unit)
        except ValueError:
            raise ValueError(f"Unknown condition unit {unit!r} in {condition!r}") from None

        return cls(activity_type=activity_type, threshold=int(threshold), unit=parsed_unit)

    def matches(self, activity_type: str) -> bool:
        """Whether a completion of this activity type counts toward the rule"""
        return self.activity_type == ANY_ACTIVITY or self.activity_type == activity_type

    def to_condition(self) -> str:
        return f"{self.activity_type}_{self.threshold}_{self.unit.value}"


class Achievement(BaseModel):
    """Achievement definition"""
    id: int
    name: str
    description: str
    icon: str
    bonus_points: int = Field(default=0, ge=0)
    condition: str
    rule: AchievementRule = Field(exclude=True)
    color_scheme: str = "primary"
    created_at: datetime


class UserAchievement(BaseModel):
    """Unlock record, at most one per (user, achievement)"""
    id: int
    user_id: int
    achievement_id: int
    unlocked_at: datetime


class UserAchievementWithDetails(UserAchievement):
    """Unlock record joined with its achievement definition"""
    achievement: Optional[Achievement] = None
