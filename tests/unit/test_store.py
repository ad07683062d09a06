"""Unit tests for the in-memory entity store (wellness/db/store.py)"""
import pytest

from wellness.exceptions import RecordNotFoundError, ValidationError
from wellness.models import ChatRole, ConditionUnit, MoodType


# ============================================================================
# Users
# ============================================================================

@pytest.mark.asyncio
async def test_create_user_defaults(store, clock):
    """New users start at level 1 with no points or streak"""
    user = await store.create_user("bob", "hash", "Bob")

    assert user.id == 1
    assert user.level == 1
    assert user.points == 0
    assert user.streak_days == 0
    assert user.best_streak == 0
    assert user.last_login is None
    assert user.created_at == clock.current


@pytest.mark.asyncio
async def test_create_user_duplicate_username(store, user):
    """Usernames are unique"""
    with pytest.raises(ValidationError) as exc_info:
        await store.create_user("alice", "other", "Other Alice")

    assert exc_info.value.field == "username"


@pytest.mark.asyncio
async def test_get_missing_records_return_none(store):
    """Lookups of unknown ids are absent, not errors"""
    assert await store.get_user(99) is None
    assert await store.get_user_by_username("nobody") is None
    assert await store.get_mood(99) is None
    assert await store.get_activity(99) is None
    assert await store.get_user_activity(99) is None
    assert await store.get_achievement(99) is None
    assert await store.get_chat_message(99) is None


@pytest.mark.asyncio
async def test_update_user_mutable_fields(store, user):
    """Progression fields can be updated"""
    updated = await store.update_user(user.id, points=120, level=2)

    assert updated.points == 120
    assert updated.level == 2
    assert (await store.get_user(user.id)).points == 120


@pytest.mark.asyncio
async def test_update_user_rejects_identity_fields(store, user):
    """Identity fields never change after registration"""
    with pytest.raises(ValueError):
        await store.update_user(user.id, username="mallory")


@pytest.mark.asyncio
async def test_update_missing_user(store):
    with pytest.raises(RecordNotFoundError):
        await store.update_user(42, points=10)


@pytest.mark.asyncio
async def test_returned_records_are_copies(store, user):
    """Mutating a returned record does not change the stored one"""
    user.points = 999

    assert (await store.get_user(user.id)).points == 0


@pytest.mark.asyncio
async def test_password_hash_not_serialized(store, user):
    assert "password_hash" not in user.model_dump()
    assert user.password_hash == "not-a-real-hash"


# ============================================================================
# Moods
# ============================================================================

@pytest.mark.asyncio
async def test_mood_round_trip(store, user, clock):
    """A created mood is retrievable by id and in the user's list"""
    mood = await store.create_mood(user.id, MoodType.CALM, "after a walk")

    assert mood.timestamp == clock.current
    assert await store.get_mood(mood.id) == mood
    assert await store.get_moods_by_user_id(user.id) == [mood]


@pytest.mark.asyncio
async def test_moods_newest_first(store, user, clock):
    first = await store.create_mood(user.id, MoodType.SAD)
    clock.advance(hours=1)
    second = await store.create_mood(user.id, MoodType.HAPPY)

    moods = await store.get_moods_by_user_id(user.id)

    assert [m.id for m in moods] == [second.id, first.id]


@pytest.mark.asyncio
async def test_moods_same_timestamp_ordered_by_id(store, user):
    """Ties on timestamp are broken by id"""
    first = await store.create_mood(user.id, MoodType.SAD)
    second = await store.create_mood(user.id, MoodType.HAPPY)

    moods = await store.get_moods_by_user_id(user.id)

    assert [m.id for m in moods] == [second.id, first.id]


@pytest.mark.asyncio
async def test_moods_scoped_to_user(store, user):
    other = await store.create_user("carol", "hash", "Carol")
    await store.create_mood(other.id, MoodType.ANXIOUS)

    assert await store.get_moods_by_user_id(user.id) == []


@pytest.mark.asyncio
async def test_weekly_moods_window_and_order(store, user, clock):
    """Only the last 7 days are returned, oldest first"""
    old = await store.create_mood(user.id, MoodType.SAD)
    clock.advance(days=3)
    recent = await store.create_mood(user.id, MoodType.NEUTRAL)
    clock.advance(days=3)
    latest = await store.create_mood(user.id, MoodType.HAPPY)
    clock.advance(days=2)

    weekly = await store.get_weekly_moods(user.id)

    assert old.id not in [m.id for m in weekly]
    assert [m.id for m in weekly] == [recent.id, latest.id]


# ============================================================================
# Activities and completions
# ============================================================================

@pytest.mark.asyncio
async def test_activity_round_trip(store, breathing_activity):
    assert await store.get_activity(breathing_activity.id) == breathing_activity
    assert await store.get_activities() == [breathing_activity]


@pytest.mark.asyncio
async def test_user_activities_newest_first(store, user, breathing_activity, meditation_activity, clock):
    first = await store.create_user_activity(user.id, breathing_activity.id)
    clock.advance(minutes=5)
    second = await store.create_user_activity(user.id, meditation_activity.id)

    history = await store.get_user_activities_by_user_id(user.id)

    assert [ua.id for ua in history] == [second.id, first.id]
    assert await store.get_user_activity(first.id) == first


@pytest.mark.asyncio
async def test_ids_are_never_reused(store, user, breathing_activity):
    ids = [
        (await store.create_user_activity(user.id, breathing_activity.id)).id
        for _ in range(3)
    ]

    assert ids == [1, 2, 3]


# ============================================================================
# Achievements
# ============================================================================

@pytest.mark.asyncio
async def test_create_achievement_parses_condition(store):
    achievement = await store.create_achievement(
        name="Breathing Expert",
        description="Complete 10 breathing exercises",
        icon="fa-wind",
        bonus_points=150,
        condition="breathing_10_sessions",
    )

    assert achievement.rule.activity_type == "breathing"
    assert achievement.rule.threshold == 10
    assert achievement.rule.unit == ConditionUnit.SESSIONS
    assert "rule" not in achievement.model_dump()


@pytest.mark.asyncio
async def test_create_achievement_malformed_condition(store):
    with pytest.raises(ValidationError) as exc_info:
        await store.create_achievement(
            name="Broken",
            description="Never unlockable",
            icon="fa-bug",
            bonus_points=0,
            condition="breathing_ten_sessions",
        )

    assert exc_info.value.field == "condition"
    assert await store.get_achievements() == []


@pytest.mark.asyncio
async def test_user_achievements_newest_first(store, user, clock):
    a1 = await store.create_achievement("A", "a", "fa-a", 0, "any_1_sessions")
    a2 = await store.create_achievement("B", "b", "fa-b", 0, "any_2_sessions")
    ua1 = await store.create_user_achievement(user.id, a1.id)
    clock.advance(seconds=1)
    ua2 = await store.create_user_achievement(user.id, a2.id)

    unlocked = await store.get_user_achievements_by_user_id(user.id)

    assert [ua.id for ua in unlocked] == [ua2.id, ua1.id]


# ============================================================================
# Chat
# ============================================================================

@pytest.mark.asyncio
async def test_chat_history_oldest_first(store, user, clock):
    question = await store.create_chat_message(user.id, ChatRole.USER, "Hi")
    clock.advance(seconds=2)
    answer = await store.create_chat_message(user.id, ChatRole.ASSISTANT, "Hello!")

    history = await store.get_chat_messages_by_user_id(user.id)

    assert history == [question, answer]
    assert await store.get_chat_message(answer.id) == answer
