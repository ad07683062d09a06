"""
ChatService - Conversation with the external chat agent

The user-visible outcome of sending a message is always a stored assistant
reply: when the relay is unavailable a fixed fallback reply is stored instead.
"""

import logging
from typing import List

from wellness.chat.relay import ChatRelay
from wellness.db.store import Storage
from wellness.exceptions import UpstreamUnavailableError, ValidationError
from wellness.models import ChatMessage, ChatRole
from wellness.resilience import FallbackStrategy, execute_with_fallbacks

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "I'm having trouble connecting right now. Could you try sending your message again?"


class ChatService:
    """
    Service for chat messages.

    Responsibilities:
    - Persist user and assistant messages
    - Relay messages with history to the chat webhook
    - Substitute the fallback reply when the relay fails
    """

    def __init__(self, store: Storage, relay: ChatRelay):
        self.store = store
        self.relay = relay

    async def send_message(self, user_id: int, content: str) -> ChatMessage:
        """
        Store a user message, get the assistant reply and store it.

        Args:
            user_id: User ID
            content: Message text

        Returns:
            The stored assistant message

        Raises:
            ValidationError: If the message is empty
        """
        if not content or not content.strip():
            raise ValidationError(
                message="Message is required",
                field="message",
                value=content,
                user_id=user_id,
                operation="send_message",
            )

        await self.store.create_chat_message(user_id, ChatRole.USER, content)
        history = await self.store.get_chat_messages_by_user_id(user_id)

        strategies = [
            FallbackStrategy("chat_webhook", self.relay.reply, priority=1),
            FallbackStrategy("fallback_reply", self._fallback_reply, priority=2),
        ]
        reply = await execute_with_fallbacks(
            strategies,
            content,
            history,
            fallback_on=(UpstreamUnavailableError,),
        )

        saved = await self.store.create_chat_message(user_id, ChatRole.ASSISTANT, reply)
        logger.info(f"Stored assistant reply {saved.id} for user {user_id}")
        return saved

    async def get_history(self, user_id: int) -> List[ChatMessage]:
        """Conversation for a user, oldest first"""
        return await self.store.get_chat_messages_by_user_id(user_id)

    @staticmethod
    async def _fallback_reply(message: str, history: List[ChatMessage]) -> str:
        return FALLBACK_REPLY
