"""
Service Container - Dependency Injection Container

Simple DI container for managing service instances and their dependencies.
Uses lazy loading to only instantiate services when first accessed.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from wellness.chat.relay import ChatRelay
from wellness.db.store import Storage

logger = logging.getLogger(__name__)


@dataclass
class ServiceContainer:
    """
    Simple dependency injection container for services.

    Services are lazy-loaded on first access via properties.
    Infrastructure dependencies (store, chat_relay) are injected.
    """

    # Infrastructure dependencies (injected)
    store: Storage
    chat_relay: ChatRelay

    # Services (lazy-loaded via properties)
    _user_service: Optional[object] = field(default=None, init=False, repr=False)
    _mood_service: Optional[object] = field(default=None, init=False, repr=False)
    _progression_service: Optional[object] = field(default=None, init=False, repr=False)
    _chat_service: Optional[object] = field(default=None, init=False, repr=False)

    @property
    def user_service(self):
        """Get UserService instance (lazy-loaded)"""
        if self._user_service is None:
            from wellness.services.user_service import UserService
            self._user_service = UserService(self.store)
            logger.debug("UserService instantiated")
        return self._user_service

    @property
    def mood_service(self):
        """Get MoodService instance (lazy-loaded)"""
        if self._mood_service is None:
            from wellness.services.mood_service import MoodService
            self._mood_service = MoodService(self.store)
            logger.debug("MoodService instantiated")
        return self._mood_service

    @property
    def progression_service(self):
        """Get ProgressionService instance (lazy-loaded)"""
        if self._progression_service is None:
            from wellness.services.progression_service import ProgressionService
            self._progression_service = ProgressionService(self.store)
            logger.debug("ProgressionService instantiated")
        return self._progression_service

    @property
    def chat_service(self):
        """Get ChatService instance (lazy-loaded)"""
        if self._chat_service is None:
            from wellness.services.chat_service import ChatService
            self._chat_service = ChatService(self.store, self.chat_relay)
            logger.debug("ChatService instantiated")
        return self._chat_service


def init_container(store: Storage, chat_relay: ChatRelay) -> ServiceContainer:
    """
    Build the service container for one application instance.

    Args:
        store: Entity store
        chat_relay: Chat webhook client

    Returns:
        ServiceContainer: The initialized container
    """
    container = ServiceContainer(store=store, chat_relay=chat_relay)
    logger.info("Service container initialized")
    return container
