"""
UserService - Registration and credential checks

Passwords are stored as bcrypt hashes. Session handling lives in the API
layer; this service only answers "who is this".
"""

import logging

import bcrypt

from wellness.db.store import Storage
from wellness.exceptions import AuthenticationError
from wellness.models import User
from wellness.monitoring.metrics import record_user_registration

logger = logging.getLogger(__name__)

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a plain-text password using bcrypt."""
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


class UserService:
    """
    Service for user accounts.

    Responsibilities:
    - Registration with hashed credentials
    - Credential verification at login
    """

    def __init__(self, store: Storage):
        self.store = store

    async def register(self, username: str, password: str, name: str) -> User:
        """
        Create a new user.

        Raises:
            ValidationError: If the username is taken
        """
        user = await self.store.create_user(username, hash_password(password), name)
        record_user_registration()
        logger.info(f"Registered user {user.id} ({username})")
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """
        Check credentials.

        Raises:
            AuthenticationError: If the username is unknown or the password is wrong
        """
        user = await self.store.get_user_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError(
                message=f"Invalid credentials for username {username!r}",
                operation="authenticate",
            )
        return user
