"""User account model"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class User(BaseModel):
    """Registered user with progression state"""
    id: int
    username: str
    password_hash: str = Field(exclude=True, repr=False)
    name: str
    level: int = Field(default=1, ge=1)
    points: int = 0
    streak_days: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    last_login: Optional[datetime] = None
    created_at: datetime
