"""
Entity store

`Storage` is the narrow interface the progression engine talks to.
`MemoryStore` backs it with one dict plus a monotonic id counter per
collection; ids start at 1 and are never reused.

Ordering guarantees:
- moods, user activities, user achievements: newest first
- weekly moods, chat history: oldest first
Records sharing a timestamp are ordered by id.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from wellness.exceptions import RecordNotFoundError, ValidationError
from wellness.models import (
    Achievement,
    AchievementRule,
    Activity,
    ActivityType,
    ChatMessage,
    ChatRole,
    Mood,
    MoodType,
    User,
    UserActivity,
    UserAchievement,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

# Fields of User that may change after registration
MUTABLE_USER_FIELDS = frozenset({"points", "level", "streak_days", "best_streak", "last_login"})

WEEKLY_WINDOW = timedelta(days=7)


class Storage(ABC):
    """Interface for entity persistence used by the progression engine"""

    # Users
    @abstractmethod
    async def create_user(self, username: str, password_hash: str, name: str) -> User: ...

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    async def update_user(self, user_id: int, **fields) -> User: ...

    # Moods
    @abstractmethod
    async def create_mood(self, user_id: int, mood: MoodType, note: Optional[str] = None) -> Mood: ...

    @abstractmethod
    async def get_mood(self, mood_id: int) -> Optional[Mood]: ...

    @abstractmethod
    async def get_moods_by_user_id(self, user_id: int) -> List[Mood]: ...

    @abstractmethod
    async def get_weekly_moods(self, user_id: int) -> List[Mood]: ...

    # Activity catalog
    @abstractmethod
    async def create_activity(
        self,
        name: str,
        description: str,
        type: ActivityType,
        points: int,
        icon: str,
        color_scheme: str,
        duration: int = 0,
    ) -> Activity: ...

    @abstractmethod
    async def get_activity(self, activity_id: int) -> Optional[Activity]: ...

    @abstractmethod
    async def get_activities(self) -> List[Activity]: ...

    # Completion records
    @abstractmethod
    async def create_user_activity(self, user_id: int, activity_id: int) -> UserActivity: ...

    @abstractmethod
    async def get_user_activity(self, user_activity_id: int) -> Optional[UserActivity]: ...

    @abstractmethod
    async def get_user_activities_by_user_id(self, user_id: int) -> List[UserActivity]: ...

    # Achievement catalog
    @abstractmethod
    async def create_achievement(
        self,
        name: str,
        description: str,
        icon: str,
        bonus_points: int,
        condition: str,
        color_scheme: str = "primary",
    ) -> Achievement: ...

    @abstractmethod
    async def get_achievement(self, achievement_id: int) -> Optional[Achievement]: ...

    @abstractmethod
    async def get_achievements(self) -> List[Achievement]: ...

    # Unlock records
    @abstractmethod
    async def create_user_achievement(self, user_id: int, achievement_id: int) -> UserAchievement: ...

    @abstractmethod
    async def get_user_achievements_by_user_id(self, user_id: int) -> List[UserAchievement]: ...

    # Chat
    @abstractmethod
    async def create_chat_message(self, user_id: int, role: ChatRole, content: str) -> ChatMessage: ...

    @abstractmethod
    async def get_chat_message(self, message_id: int) -> Optional[ChatMessage]: ...

    @abstractmethod
    async def get_chat_messages_by_user_id(self, user_id: int) -> List[ChatMessage]: ...


class _Collection(Generic[T]):
    """Keyed records plus the id counter for one entity type"""

    def __init__(self, name: str):
        self.name = name
        self._records: Dict[int, T] = {}
        self._next_id = 1

    def insert(self, build: Callable[[int], T]) -> T:
        record = build(self._next_id)
        self._next_id += 1
        self._records[record.id] = record
        logger.debug(f"Inserted {self.name} record {record.id}")
        return record.model_copy()

    def get(self, record_id: int) -> Optional[T]:
        record = self._records.get(record_id)
        return record.model_copy() if record else None

    def replace(self, record: T) -> None:
        self._records[record.id] = record

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [r.model_copy() for r in self._records.values() if predicate(r)]

    def all(self) -> List[T]:
        return [r.model_copy() for r in self._records.values()]


class MemoryStore(Storage):
    """In-process implementation of `Storage`"""

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._users: _Collection[User] = _Collection("users")
        self._moods: _Collection[Mood] = _Collection("moods")
        self._activities: _Collection[Activity] = _Collection("activities")
        self._user_activities: _Collection[UserActivity] = _Collection("user_activities")
        self._achievements: _Collection[Achievement] = _Collection("achievements")
        self._user_achievements: _Collection[UserAchievement] = _Collection("user_achievements")
        self._chat_messages: _Collection[ChatMessage] = _Collection("chat_messages")

    def now(self) -> datetime:
        return self._clock()

    # ==========================================
    # Users
    # ==========================================

    async def create_user(self, username: str, password_hash: str, name: str) -> User:
        if await self.get_user_by_username(username):
            raise ValidationError(
                message="Username already exists",
                field="username",
                value=username,
                operation="create_user",
            )

        created_at = self.now()
        user = self._users.insert(lambda new_id: User(
            id=new_id,
            username=username,
            password_hash=password_hash,
            name=name,
            created_at=created_at,
        ))
        logger.info(f"Created user {user.id} ({username})")
        return user

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        matches = self._users.filter(lambda u: u.username == username)
        return matches[0] if matches else None

    async def update_user(self, user_id: int, **fields) -> User:
        """
        Update mutable progression fields of a user

        Raises:
            RecordNotFoundError: If the user does not exist
            ValueError: If a non-mutable field is passed
        """
        unknown = set(fields) - MUTABLE_USER_FIELDS
        if unknown:
            raise ValueError(f"User fields are not mutable: {sorted(unknown)}")

        user = self._users.get(user_id)
        if user is None:
            raise RecordNotFoundError(
                message=f"User {user_id} not found",
                record_type="User",
                record_id=user_id,
                operation="update_user",
            )

        updated = user.model_copy(update=fields)
        self._users.replace(updated)
        return updated.model_copy()

    # ==========================================
    # Moods
    # ==========================================

    async def create_mood(self, user_id: int, mood: MoodType, note: Optional[str] = None) -> Mood:
        timestamp = self.now()
        return self._moods.insert(lambda new_id: Mood(
            id=new_id,
            user_id=user_id,
            mood=mood,
            timestamp=timestamp,
            note=note,
        ))

    async def get_mood(self, mood_id: int) -> Optional[Mood]:
        return self._moods.get(mood_id)

    async def get_moods_by_user_id(self, user_id: int) -> List[Mood]:
        moods = self._moods.filter(lambda m: m.user_id == user_id)
        return sorted(moods, key=lambda m: (m.timestamp, m.id), reverse=True)

    async def get_weekly_moods(self, user_id: int) -> List[Mood]:
        one_week_ago = self.now() - WEEKLY_WINDOW
        moods = self._moods.filter(lambda m: m.user_id == user_id and m.timestamp >= one_week_ago)
        return sorted(moods, key=lambda m: (m.timestamp, m.id))

    # ==========================================
    # Activity catalog
    # ==========================================

    async def create_activity(
        self,
        name: str,
        description: str,
        type: ActivityType,
        points: int,
        icon: str,
        color_scheme: str,
        duration: int = 0,
    ) -> Activity:
        created_at = self.now()
        return self._activities.insert(lambda new_id: Activity(
            id=new_id,
            name=name,
            description=description,
            type=type,
            points=points,
            icon=icon,
            color_scheme=color_scheme,
            duration=duration,
            created_at=created_at,
        ))

    async def get_activity(self, activity_id: int) -> Optional[Activity]:
        return self._activities.get(activity_id)

    async def get_activities(self) -> List[Activity]:
        return self._activities.all()

    # ==========================================
    # Completion records
    # ==========================================

    async def create_user_activity(self, user_id: int, activity_id: int) -> UserActivity:
        completed_at = self.now()
        return self._user_activities.insert(lambda new_id: UserActivity(
            id=new_id,
            user_id=user_id,
            activity_id=activity_id,
            completed_at=completed_at,
        ))

    async def get_user_activity(self, user_activity_id: int) -> Optional[UserActivity]:
        return self._user_activities.get(user_activity_id)

    async def get_user_activities_by_user_id(self, user_id: int) -> List[UserActivity]:
        records = self._user_activities.filter(lambda ua: ua.user_id == user_id)
        return sorted(records, key=lambda ua: (ua.completed_at, ua.id), reverse=True)

    # ==========================================
    # Achievement catalog
    # ==========================================

    async def create_achievement(
        self,
        name: str,
        description: str,
        icon: str,
        bonus_points: int,
        condition: str,
        color_scheme: str = "primary",
    ) -> Achievement:
        """
        Add an achievement to the catalog, parsing its condition string once

        Raises:
            ValidationError: If the condition string is malformed
        """
        try:
            rule = AchievementRule.parse(condition)
        except ValueError as e:
            raise ValidationError(
                message=str(e),
                field="condition",
                value=condition,
                operation="create_achievement",
            ) from e

        created_at = self.now()
        return self._achievements.insert(lambda new_id: Achievement(
            id=new_id,
            name=name,
            description=description,
            icon=icon,
            bonus_points=bonus_points,
            condition=condition,
            rule=rule,
            color_scheme=color_scheme,
            created_at=created_at,
        ))

    async def get_achievement(self, achievement_id: int) -> Optional[Achievement]:
        return self._achievements.get(achievement_id)

    async def get_achievements(self) -> List[Achievement]:
        return self._achievements.all()

    # ==========================================
    # Unlock records
    # ==========================================

    async def create_user_achievement(self, user_id: int, achievement_id: int) -> UserAchievement:
        unlocked_at = self.now()
        return self._user_achievements.insert(lambda new_id: UserAchievement(
            id=new_id,
            user_id=user_id,
            achievement_id=achievement_id,
            unlocked_at=unlocked_at,
        ))

    async def get_user_achievements_by_user_id(self, user_id: int) -> List[UserAchievement]:
        records = self._user_achievements.filter(lambda ua: ua.user_id == user_id)
        return sorted(records, key=lambda ua: (ua.unlocked_at, ua.id), reverse=True)

    # ==========================================
    # Chat
    # ==========================================

    async def create_chat_message(self, user_id: int, role: ChatRole, content: str) -> ChatMessage:
        timestamp = self.now()
        return self._chat_messages.insert(lambda new_id: ChatMessage(
            id=new_id,
            user_id=user_id,
            role=role,
            content=content,
            timestamp=timestamp,
        ))

    async def get_chat_message(self, message_id: int) -> Optional[ChatMessage]:
        return self._chat_messages.get(message_id)

    async def get_chat_messages_by_user_id(self, user_id: int) -> List[ChatMessage]:
        messages = self._chat_messages.filter(lambda m: m.user_id == user_id)
        return sorted(messages, key=lambda m: (m.timestamp, m.id))
