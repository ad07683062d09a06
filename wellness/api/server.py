"""FastAPI application setup"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from wellness.api.auth import SessionRegistry
from wellness.api.middleware import setup_cors, setup_rate_limiting
from wellness.api.routes import router
from wellness.chat import ChatRelay
from wellness.config import LOG_LEVEL, SEED_CATALOG
from wellness.db import MemoryStore, Storage
from wellness.db.seed import seed_catalog
from wellness.exceptions import (
    AuthenticationError,
    RecordNotFoundError,
    ValidationError,
    WellnessError,
)
from wellness.services import init_container

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper())
)

logger = logging.getLogger(__name__)


def _status_for(exc: WellnessError) -> int:
    if isinstance(exc, RecordNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_api_application(
    store: Optional[Storage] = None,
    chat_relay: Optional[ChatRelay] = None,
    sessions: Optional[SessionRegistry] = None
) -> FastAPI:
    """
    Create and configure FastAPI application

    Args:
        store: Entity store (defaults to a fresh MemoryStore)
        chat_relay: Chat webhook client (defaults to one built from config)
        sessions: Session registry (defaults to an empty one)
    """
    store = store or MemoryStore()
    chat_relay = chat_relay or ChatRelay()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifecycle manager for FastAPI application"""
        # Startup
        logger.info("Starting API server...")
        if SEED_CATALOG:
            await seed_catalog(store)

        yield

        # Shutdown
        logger.info("Shutting down API server...")
        await chat_relay.close()
        logger.info("Chat relay client closed")

    app = FastAPI(
        title="Wellness Tracker API",
        description="REST API for mood logging, self-care activities and progression",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.container = init_container(store, chat_relay)
    app.state.sessions = sessions or SessionRegistry()

    # Setup middleware
    setup_cors(app)
    setup_rate_limiting(app)

    # Include routes
    app.include_router(router)

    @app.exception_handler(WellnessError)
    async def wellness_exception_handler(request: Request, exc: WellnessError):
        return JSONResponse(status_code=_status_for(exc), content=exc.to_dict())

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "detail": str(exc)}
        )

    logger.info("FastAPI application created")

    return app
