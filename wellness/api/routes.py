"""API routes for the wellness tracker"""
import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import Response

from wellness.api.auth import get_current_user_id, get_session_token
from wellness.api.middleware import limiter
from wellness.api.models import (
    RegisterRequest, LoginRequest, AuthResponse, UserResponse, LogoutResponse,
    MoodRequest, UserActivityRequest, ChatRequest,
    PointsConversionRequest, PointsConversionResponse,
    AchievementResponse, UserAchievementResponse,
    ProgressResponse, HealthCheckResponse,
)
from wellness.models import Activity, ChatMessage, Mood, UserActivity
from wellness.services import ServiceContainer

logger = logging.getLogger(__name__)

router = APIRouter()


def get_container(request: Request) -> ServiceContainer:
    """Service container of the running application"""
    return request.app.state.container


# ==========================================
# Auth
# ==========================================

@router.post("/api/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("10/minute")
async def register(
    request: Request,
    payload: RegisterRequest,
    services: ServiceContainer = Depends(get_container)
):
    """Create an account and open a session (Rate limit: 10/minute)"""
    user = await services.user_service.register(payload.username, payload.password, payload.name)
    user = await services.progression_service.record_login(user.id)
    token = request.app.state.sessions.create(user.id)
    return AuthResponse(token=token, user=UserResponse.model_validate(user.model_dump()))


@router.post("/api/login", response_model=AuthResponse)
@limiter.limit("10/minute")
async def login(
    request: Request,
    payload: LoginRequest,
    services: ServiceContainer = Depends(get_container)
):
    """Check credentials, update the login streak and open a session"""
    user = await services.user_service.authenticate(payload.username, payload.password)
    user = await services.progression_service.record_login(user.id)
    token = request.app.state.sessions.create(user.id)
    logger.info(f"User {user.id} logged in (streak {user.streak_days})")
    return AuthResponse(token=token, user=UserResponse.model_validate(user.model_dump()))


@router.post("/api/logout", response_model=LogoutResponse)
async def logout(request: Request, token: str = Depends(get_session_token)):
    """End the current session"""
    revoked = request.app.state.sessions.revoke(token)
    return LogoutResponse(success=revoked)


@router.get("/api/user", response_model=UserResponse)
@limiter.limit("30/minute")
async def get_user(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Current user profile with progression fields"""
    return await services.progression_service.get_user(user_id)


# ==========================================
# Moods
# ==========================================

@router.post("/api/moods", response_model=Mood, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
async def create_mood(
    request: Request,
    payload: MoodRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Log a mood (Rate limit: 30/minute)"""
    return await services.mood_service.log_mood(user_id, payload.mood, payload.note)


@router.get("/api/moods", response_model=List[Mood])
@limiter.limit("30/minute")
async def list_moods(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """All mood entries, newest first"""
    return await services.mood_service.list_moods(user_id)


@router.get("/api/moods/weekly", response_model=List[Mood])
@limiter.limit("30/minute")
async def weekly_moods(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Mood entries from the last 7 days, oldest first"""
    return await services.mood_service.weekly_moods(user_id)


# ==========================================
# Activities and achievements
# ==========================================

@router.get("/api/activities", response_model=List[Activity])
@limiter.limit("60/minute")
async def list_activities(
    request: Request,
    services: ServiceContainer = Depends(get_container)
):
    """Activity catalog"""
    return await services.progression_service.list_activities()


@router.post("/api/user-activities", response_model=UserActivity, status_code=status.HTTP_201_CREATED)
@limiter.limit("30/minute")
async def complete_activity(
    request: Request,
    payload: UserActivityRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Record a completed activity, credit its points and evaluate achievements"""
    return await services.progression_service.complete_activity(user_id, payload.activity_id)


@router.get("/api/user-activities", response_model=List[UserActivity])
@limiter.limit("30/minute")
async def list_user_activities(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Completion history, newest first"""
    return await services.progression_service.list_user_activities(user_id)


@router.get("/api/achievements", response_model=List[AchievementResponse])
@limiter.limit("60/minute")
async def list_achievements(
    request: Request,
    services: ServiceContainer = Depends(get_container)
):
    """Achievement catalog"""
    return await services.progression_service.list_achievements()


@router.get("/api/user-achievements", response_model=List[UserAchievementResponse])
@limiter.limit("30/minute")
async def list_user_achievements(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Unlocked achievements with their details, newest first"""
    return await services.progression_service.list_user_achievements(user_id)


# ==========================================
# Points and progress
# ==========================================

@router.post("/api/update-points", response_model=PointsConversionResponse)
@limiter.limit("10/minute")
async def update_points(
    request: Request,
    payload: PointsConversionRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Spend points for token conversion (Rate limit: 10/minute)"""
    user = await services.progression_service.spend_points(user_id, payload.points_spent)
    return PointsConversionResponse(
        success=True,
        user=UserResponse.model_validate(user.model_dump()),
        points_converted=payload.points_spent,
    )


@router.get("/api/progress", response_model=ProgressResponse)
@limiter.limit("30/minute")
async def get_progress(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Points, level, streaks and closest locked achievements"""
    return await services.progression_service.get_progress_summary(user_id)


# ==========================================
# Chat
# ==========================================

@router.post("/api/chat", response_model=ChatMessage)
@limiter.limit("10/minute")
async def chat(
    request: Request,
    payload: ChatRequest,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """
    Chat endpoint - relays a message to the chat agent

    Always answers with a stored assistant message; when the agent is
    unreachable the reply is a fixed fallback text.
    Rate limit: 10 requests per minute
    """
    return await services.chat_service.send_message(user_id, payload.message)


@router.get("/api/chat/history", response_model=List[ChatMessage])
@limiter.limit("30/minute")
async def chat_history(
    request: Request,
    user_id: int = Depends(get_current_user_id),
    services: ServiceContainer = Depends(get_container)
):
    """Conversation history, oldest first"""
    return await services.chat_service.get_history(user_id)


# ==========================================
# Operations
# ==========================================

@router.get("/api/health", response_model=HealthCheckResponse)
@limiter.limit("60/minute")
async def health_check(
    request: Request,
    services: ServiceContainer = Depends(get_container)
):
    """Health check endpoint (Rate limit: 60/minute for monitoring systems)"""
    relay_status = "configured" if services.chat_relay.webhook_url else "not_configured"
    return HealthCheckResponse(
        status="healthy",
        chat_relay=relay_status,
        timestamp=datetime.now()
    )


@router.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint.

    Exposes all application metrics in Prometheus text format.
    """
    from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )
