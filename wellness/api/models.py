"""Pydantic models for API request/response validation"""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from wellness.models import MoodType


# ==========================================
# Requests
# ==========================================

class RegisterRequest(BaseModel):
    """Request to create an account"""
    username: str = Field(..., min_length=3, description="Unique login name")
    password: str = Field(..., min_length=6, description="Plain-text password")
    name: str = Field(..., min_length=1, description="Display name")


class LoginRequest(BaseModel):
    """Request to open a session"""
    username: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)


class MoodRequest(BaseModel):
    """Request to log a mood"""
    mood: MoodType = Field(..., description="One of happy, calm, neutral, sad, anxious")
    note: Optional[str] = Field(default=None, description="Optional free-text note")


class UserActivityRequest(BaseModel):
    """Request to record an activity completion"""
    model_config = ConfigDict(populate_by_name=True)

    activity_id: int = Field(..., alias="activityId", description="Catalog activity ID")


class ChatRequest(BaseModel):
    """Request model for chat endpoint"""
    message: str = Field(..., description="User message text")


class PointsConversionRequest(BaseModel):
    """Request to spend points for token conversion"""
    model_config = ConfigDict(populate_by_name=True)

    points_spent: int = Field(..., alias="pointsSpent", description="Points to deduct")


# ==========================================
# Responses
# ==========================================

class UserResponse(BaseModel):
    """Public view of a user (no credentials)"""
    id: int
    username: str
    name: str
    level: int
    points: int
    streak_days: int
    best_streak: int
    last_login: Optional[datetime] = None
    created_at: datetime


class AuthResponse(BaseModel):
    """Response for register and login"""
    token: str = Field(..., description="Bearer session token")
    user: UserResponse


class AchievementResponse(BaseModel):
    """Catalog achievement"""
    id: int
    name: str
    description: str
    icon: str
    bonus_points: int
    condition: str
    color_scheme: str
    created_at: datetime


class UserAchievementResponse(BaseModel):
    """Unlock record joined with its achievement"""
    id: int
    user_id: int
    achievement_id: int
    unlocked_at: datetime
    achievement: Optional[AchievementResponse] = None


class PointsConversionResponse(BaseModel):
    """Result of a token conversion"""
    success: bool
    user: UserResponse
    points_converted: int


class NextAchievement(BaseModel):
    achievement_id: int
    name: str
    current: int
    required: int
    percentage: int


class ProgressResponse(BaseModel):
    """Dashboard progression summary"""
    user_id: int
    points: int
    level: int
    points_in_level: int
    points_to_next_level: int
    streak_days: int
    best_streak: int
    streak_message: str
    activities_completed: int
    achievements_unlocked: int
    bonus_points_earned: int
    next_achievements: List[NextAchievement]


class LogoutResponse(BaseModel):
    success: bool


class HealthCheckResponse(BaseModel):
    """Health check response"""
    status: str = Field(..., description="Service status")
    chat_relay: str = Field(..., description="Chat webhook configuration status")
    timestamp: datetime = Field(..., description="Check timestamp")
