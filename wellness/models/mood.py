"""Mood log models"""
from enum import Enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class MoodType(str, Enum):
    """Moods a user can log"""
    HAPPY = "happy"
    CALM = "calm"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANXIOUS = "anxious"


class Mood(BaseModel):
    """Single mood log entry"""
    id: int
    user_id: int
    mood: MoodType
    timestamp: datetime
    note: Optional[str] = None
