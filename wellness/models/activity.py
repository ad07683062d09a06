"""Self-care activity catalog and completion models"""
from enum import Enum
from datetime import datetime
from pydantic import BaseModel, Field


class ActivityType(str, Enum):
    """Activity categories, also used by achievement conditions"""
    BREATHING = "breathing"
    MEDITATION = "meditation"
    JOURNAL = "journal"
    AFFIRMATION = "affirmation"
    RELAXATION = "relaxation"
    WALKING = "walking"


class Activity(BaseModel):
    """Catalog activity"""
    id: int
    name: str
    description: str
    type: ActivityType
    points: int = Field(ge=0)
    icon: str
    color_scheme: str
    duration: int = Field(default=0, ge=0, description="Minutes, 0 = instantaneous")
    created_at: datetime


class UserActivity(BaseModel):
    """Completion record: one user finishing one activity once"""
    id: int
    user_id: int
    activity_id: int
    completed_at: datetime
