"""Chat history models"""
from enum import Enum
from datetime import datetime
from pydantic import BaseModel


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single chat message in a user's conversation"""
    id: int
    user_id: int
    role: ChatRole
    content: str
    timestamp: datetime
