"""Default activity and achievement catalog, loaded once at startup"""
import logging

from wellness.db.store import Storage
from wellness.models import ActivityType

logger = logging.getLogger(__name__)

DEFAULT_ACTIVITIES = [
    {
        "name": "Breathing Exercise",
        "description": "5-minute guided breathing to reduce anxiety",
        "type": ActivityType.BREATHING,
        "points": 15,
        "icon": "fa-wind",
        "color_scheme": "secondary",
        "duration": 5,
    },
    {
        "name": "Quick Meditation",
        "description": "10-minute guided meditation for focus",
        "type": ActivityType.MEDITATION,
        "points": 25,
        "icon": "fa-spa",
        "color_scheme": "primary",
        "duration": 10,
    },
    {
        "name": "Gratitude Journal",
        "description": "Write 3 things you're grateful for today",
        "type": ActivityType.JOURNAL,
        "points": 20,
        "icon": "fa-pen-to-square",
        "color_scheme": "accent",
        "duration": 5,
    },
    {
        "name": "Morning Affirmations",
        "description": "Start your day with positive self-talk",
        "type": ActivityType.AFFIRMATION,
        "points": 10,
        "icon": "fa-sun",
        "color_scheme": "warning",
        "duration": 3,
    },
    {
        "name": "Progressive Muscle Relaxation",
        "description": "Release tension from head to toe",
        "type": ActivityType.RELAXATION,
        "points": 30,
        "icon": "fa-dumbbell",
        "color_scheme": "success",
        "duration": 15,
    },
    {
        "name": "Mindful Walking",
        "description": "10-minute walking meditation outdoors",
        "type": ActivityType.WALKING,
        "points": 25,
        "icon": "fa-walking",
        "color_scheme": "info",
        "duration": 10,
    },
]

# "days" conditions count completions, same as "sessions"
DEFAULT_ACHIEVEMENTS = [
    {
        "name": "First Steps",
        "description": "Complete your first activity",
        "icon": "fa-baby",
        "bonus_points": 50,
        "color_scheme": "primary",
        "condition": "any_1_sessions",
    },
    {
        "name": "Weekly Warrior",
        "description": "Complete 7 activities in one week",
        "icon": "fa-calendar-week",
        "bonus_points": 100,
        "color_scheme": "success",
        "condition": "any_7_days",
    },
    {
        "name": "Consistency Champion",
        "description": "Maintain a 14-day streak",
        "icon": "fa-trophy",
        "bonus_points": 200,
        "color_scheme": "warning",
        "condition": "any_14_days",
    },
    {
        "name": "Breathing Expert",
        "description": "Complete 10 breathing exercises",
        "icon": "fa-wind",
        "bonus_points": 150,
        "color_scheme": "info",
        "condition": "breathing_10_sessions",
    },
    {
        "name": "Mindfulness Master",
        "description": "Complete 5 meditation sessions",
        "icon": "fa-spa",
        "bonus_points": 175,
        "color_scheme": "secondary",
        "condition": "meditation_5_days",
    },
    {
        "name": "Journaling Habit",
        "description": "Write 15 gratitude journal entries",
        "icon": "fa-book",
        "bonus_points": 125,
        "color_scheme": "accent",
        "condition": "journal_15_sessions",
    },
]


async def seed_catalog(store: Storage) -> None:
    """Populate an empty store with the default activities and achievements"""
    if await store.get_activities() or await store.get_achievements():
        logger.info("Catalog already populated, skipping seed")
        return

    for activity_data in DEFAULT_ACTIVITIES:
        await store.create_activity(**activity_data)

    for achievement_data in DEFAULT_ACHIEVEMENTS:
        await store.create_achievement(**achievement_data)

    logger.info(
        f"Seeded catalog with {len(DEFAULT_ACTIVITIES)} activities "
        f"and {len(DEFAULT_ACHIEVEMENTS)} achievements"
    )
