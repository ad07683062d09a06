"""Monitoring infrastructure for the wellness tracker"""
from wellness.monitoring.sentry_config import init_sentry, set_user_context
from wellness.monitoring.metrics import (
    record_api_call,
    record_fallback,
    record_activity_completion,
    record_achievement_unlock,
    record_points_spent,
    record_mood_logged,
    record_user_registration,
)

__all__ = [
    "init_sentry",
    "set_user_context",
    "record_api_call",
    "record_fallback",
    "record_activity_completion",
    "record_achievement_unlock",
    "record_points_spent",
    "record_mood_logged",
    "record_user_registration",
]
