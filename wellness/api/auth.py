"""API authentication using opaque bearer session tokens"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from wellness.config import SESSION_TTL_HOURS
from wellness.exceptions import AuthenticationError
from wellness.monitoring import set_user_context

logger = logging.getLogger(__name__)

# Missing credentials are reported as AuthenticationError (401), not 403
security = HTTPBearer(auto_error=False)


class SessionRegistry:
    """
    In-process session store mapping bearer tokens to user ids

    Sessions expire after a fixed TTL and are lost on restart.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(hours=SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = datetime.now
    ):
        self._ttl = ttl
        self._clock = clock
        self._sessions: Dict[str, Tuple[int, datetime]] = {}

    def create(self, user_id: int) -> str:
        """Open a session for a user and return its token"""
        token = secrets.token_urlsafe(32)
        self._sessions[token] = (user_id, self._clock() + self._ttl)
        logger.debug(f"Session opened for user {user_id}")
        return token

    def resolve(self, token: str) -> Optional[int]:
        """User id for a live token, None if unknown or expired"""
        entry = self._sessions.get(token)
        if entry is None:
            return None

        user_id, expires_at = entry
        if self._clock() >= expires_at:
            del self._sessions[token]
            logger.info(f"Session for user {user_id} expired")
            return None
        return user_id

    def revoke(self, token: str) -> bool:
        """End a session. Returns False if the token was not live."""
        return self._sessions.pop(token, None) is not None


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None:
        raise AuthenticationError("Missing bearer token", operation="resolve_session")
    return credentials.credentials


async def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Raw bearer token from the Authorization header"""
    return _bearer_token(credentials)


async def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> int:
    """
    Resolve the authenticated user for a request

    Raises:
        AuthenticationError: If the token is missing, unknown or expired
    """
    token = _bearer_token(credentials)
    user_id = request.app.state.sessions.resolve(token)
    if user_id is None:
        logger.warning(f"Rejected session token: {token[:6]}...")
        raise AuthenticationError("Invalid or expired session token", operation="resolve_session")

    set_user_context(user_id)
    return user_id
