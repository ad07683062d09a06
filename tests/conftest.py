"""Global test fixtures and utilities for wellness tracker tests"""
import pytest
import pytest_asyncio
from datetime import datetime, timedelta

from wellness.db import MemoryStore
from wellness.db.seed import seed_catalog
from wellness.models import ActivityType


# ============================================================================
# Clock
# ============================================================================

class FakeClock:
    """Controllable clock for deterministic timestamps"""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    """Clock starting at a fixed mid-day local time"""
    return FakeClock(datetime(2024, 3, 10, 12, 0, 0))


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def store(clock):
    """Empty in-memory store driven by the fake clock"""
    return MemoryStore(clock=clock)


@pytest_asyncio.fixture
async def seeded_store(store):
    """Store with the default activity and achievement catalog"""
    await seed_catalog(store)
    return store


@pytest_asyncio.fixture
async def user(store):
    """Standard test user"""
    return await store.create_user("alice", "not-a-real-hash", "Alice")


@pytest_asyncio.fixture
async def breathing_activity(store):
    """Single breathing activity worth 15 points"""
    return await store.create_activity(
        name="Breathing Exercise",
        description="5-minute guided breathing",
        type=ActivityType.BREATHING,
        points=15,
        icon="fa-wind",
        color_scheme="secondary",
        duration=5,
    )


@pytest_asyncio.fixture
async def meditation_activity(store):
    """Single meditation activity worth 25 points"""
    return await store.create_activity(
        name="Quick Meditation",
        description="10-minute guided meditation",
        type=ActivityType.MEDITATION,
        points=25,
        icon="fa-spa",
        color_scheme="primary",
        duration=10,
    )
