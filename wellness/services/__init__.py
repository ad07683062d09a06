"""Service layer: business operations the API routes call"""
from wellness.services.container import ServiceContainer, init_container
from wellness.services.progression_service import ProgressionService
from wellness.services.mood_service import MoodService
from wellness.services.chat_service import ChatService, FALLBACK_REPLY
from wellness.services.user_service import UserService

__all__ = [
    "ServiceContainer",
    "init_container",
    "ProgressionService",
    "MoodService",
    "ChatService",
    "FALLBACK_REPLY",
    "UserService",
]
