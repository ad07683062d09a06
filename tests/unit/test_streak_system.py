"""Unit tests for Streak System (wellness/gamification/streak_system.py)"""
import pytest
from datetime import datetime, timedelta

from wellness.exceptions import RecordNotFoundError
from wellness.gamification.streak_system import touch_login, format_streak_display


BASE = datetime(2024, 3, 10, 9, 30)


# ============================================================================
# Streak Update Tests
# ============================================================================

@pytest.mark.asyncio
async def test_first_login_starts_streak(store, user):
    """First login creates streak of 1"""
    updated = await touch_login(store, user.id, now=BASE)

    assert updated.streak_days == 1
    assert updated.best_streak == 1
    assert updated.last_login == BASE


@pytest.mark.asyncio
async def test_consecutive_day_increments(store, user):
    await touch_login(store, user.id, now=BASE)
    updated = await touch_login(store, user.id, now=BASE + timedelta(days=1))

    assert updated.streak_days == 2
    assert updated.best_streak == 2


@pytest.mark.asyncio
async def test_same_day_no_change(store, user):
    """A second login on the same day keeps the streak"""
    await touch_login(store, user.id, now=BASE)
    later = BASE.replace(hour=22)
    updated = await touch_login(store, user.id, now=later)

    assert updated.streak_days == 1
    assert updated.last_login == later


@pytest.mark.asyncio
async def test_gap_resets_streak(store, user):
    """A gap of two or more days resets to 1"""
    await store.update_user(user.id, streak_days=5, best_streak=5, last_login=BASE)

    updated = await touch_login(store, user.id, now=BASE + timedelta(days=3))

    assert updated.streak_days == 1
    assert updated.best_streak == 5


@pytest.mark.asyncio
async def test_calendar_day_boundary(store, user):
    """23:59 then 00:01 counts as consecutive days"""
    await touch_login(store, user.id, now=datetime(2024, 3, 10, 23, 59))
    updated = await touch_login(store, user.id, now=datetime(2024, 3, 11, 0, 1))

    assert updated.streak_days == 2


@pytest.mark.asyncio
async def test_within_24h_but_two_days_apart(store, user):
    """Only calendar dates matter, not elapsed hours"""
    await touch_login(store, user.id, now=datetime(2024, 3, 10, 0, 5))
    updated = await touch_login(store, user.id, now=datetime(2024, 3, 11, 23, 55))

    assert updated.streak_days == 2


@pytest.mark.asyncio
async def test_best_streak_is_monotone(store, user):
    """best_streak never decreases and always >= streak_days"""
    logins = [BASE + timedelta(days=d) for d in (0, 1, 2, 5, 6, 10, 11, 12, 13)]
    best_seen = 0

    for login in logins:
        updated = await touch_login(store, user.id, now=login)
        assert updated.best_streak >= best_seen
        assert updated.best_streak >= updated.streak_days
        best_seen = updated.best_streak

    assert updated.streak_days == 4
    assert updated.best_streak == 4


@pytest.mark.asyncio
async def test_touch_login_missing_user(store):
    with pytest.raises(RecordNotFoundError):
        await touch_login(store, 77, now=BASE)


# ============================================================================
# Display Tests
# ============================================================================

@pytest.mark.asyncio
async def test_format_streak_display(store, user):
    assert format_streak_display(user).startswith("No streak yet")

    updated = await store.update_user(user.id, streak_days=3, best_streak=9)
    assert format_streak_display(updated) == "🔥 3-day streak (best: 9)"

    updated = await store.update_user(user.id, streak_days=9, best_streak=9)
    assert format_streak_display(updated) == "🔥 9-day streak"
