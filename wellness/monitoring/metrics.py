"""
Prometheus metrics definitions for the wellness tracker.

Metrics are organized by category:
- External API metrics: chat relay calls, latency, fallbacks
- Engagement metrics: completions, unlocks, point spends, mood logs

Metrics are exposed at the /metrics endpoint for Prometheus scraping.
"""

import logging
from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# =============================================================================
# External API Metrics
# =============================================================================

# Labels: api (chat_relay), status (success/failure)
api_calls_total = Counter(
    "api_calls_total",
    "Total number of external API calls",
    ["api", "status"],
)

api_call_duration = Histogram(
    "api_call_duration_seconds",
    "Duration of external API calls in seconds",
    ["api"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, float("inf")),
)

# Labels: primary_api, fallback_strategy, status (success/failure)
fallback_executions_total = Counter(
    "fallback_executions_total",
    "Total number of fallback strategy executions",
    ["primary_api", "fallback_strategy", "status"],
)

# =============================================================================
# Engagement Metrics
# =============================================================================

activity_completions_total = Counter(
    "activity_completions_total",
    "Total activity completions",
    ["activity_type"],
)

achievements_unlocked_total = Counter(
    "achievements_unlocked_total",
    "Total achievement unlocks",
    ["condition"],
)

points_spent_total = Counter(
    "points_spent_total",
    "Total points spent on token conversion",
)

mood_logs_total = Counter(
    "mood_logs_total",
    "Total mood log entries",
    ["mood"],
)

user_registrations_total = Counter(
    "user_registrations_total",
    "Total user registrations",
)


def record_api_call(api: str, success: bool, duration: float) -> None:
    """
    Record external API call metrics.

    Args:
        api: API name (chat_relay)
        success: Whether the call succeeded
        duration: Call duration in seconds
    """
    try:
        status = "success" if success else "failure"
        api_calls_total.labels(api=api, status=status).inc()
        api_call_duration.labels(api=api).observe(duration)
    except Exception as e:
        logger.error(f"Failed to record API call: {e}")


def record_fallback(primary_api: str, fallback_strategy: str, success: bool) -> None:
    """Record a fallback strategy execution"""
    try:
        status = "success" if success else "failure"
        fallback_executions_total.labels(
            primary_api=primary_api,
            fallback_strategy=fallback_strategy,
            status=status,
        ).inc()
        logger.debug(f"[METRICS] Fallback {primary_api} → {fallback_strategy}: {status}")
    except Exception as e:
        logger.error(f"Failed to record fallback: {e}")


def record_activity_completion(activity_type: str) -> None:
    try:
        activity_completions_total.labels(activity_type=activity_type).inc()
    except Exception as e:
        logger.error(f"Failed to record activity completion: {e}")


def record_achievement_unlock(condition: str) -> None:
    try:
        achievements_unlocked_total.labels(condition=condition).inc()
    except Exception as e:
        logger.error(f"Failed to record achievement unlock: {e}")


def record_points_spent(points: int) -> None:
    try:
        points_spent_total.inc(points)
    except Exception as e:
        logger.error(f"Failed to record points spent: {e}")


def record_mood_logged(mood: str) -> None:
    try:
        mood_logs_total.labels(mood=mood).inc()
    except Exception as e:
        logger.error(f"Failed to record mood log: {e}")


def record_user_registration() -> None:
    try:
        user_registrations_total.inc()
    except Exception as e:
        logger.error(f"Failed to record registration: {e}")
