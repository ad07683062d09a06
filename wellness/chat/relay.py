"""
Chat relay client

Posts the user's message and conversation history to the chat webhook and
returns the assistant text. Every transport failure, non-2xx status or
unreadable body is raised as UpstreamUnavailableError; callers decide how
to degrade.

Webhook contract:
    POST {"message": str, "chatHistory": [{"id", "userId", "role", "content", "timestamp"}, ...]}
    → {"response": str} or {"message": str}
"""

import logging
import time
from typing import List, Optional

import httpx

from wellness.config import CHAT_WEBHOOK_URL, CHAT_WEBHOOK_TIMEOUT
from wellness.exceptions import UpstreamUnavailableError, wrap_external_exception
from wellness.models import ChatMessage
from wellness.monitoring.metrics import record_api_call

logger = logging.getLogger(__name__)

RELAY_API_NAME = "chat_relay"

# Used when the webhook answers 2xx without reply text
DEFAULT_REPLY = "I'm here to help with your mental health journey."


def _history_entry(message: ChatMessage) -> dict:
    """Webhook shape of a stored message (camelCase keys)"""
    return {
        "id": message.id,
        "userId": message.user_id,
        "role": message.role.value,
        "content": message.content,
        "timestamp": message.timestamp.isoformat(),
    }


class ChatRelay:
    """Async client for the chat webhook"""

    def __init__(
        self,
        webhook_url: str = CHAT_WEBHOOK_URL,
        timeout: float = CHAT_WEBHOOK_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.webhook_url = webhook_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def reply(self, message: str, history: List[ChatMessage]) -> str:
        """
        Get the assistant reply for a user message

        Args:
            message: Latest user message
            history: Conversation so far, oldest first

        Returns:
            Assistant reply text

        Raises:
            UpstreamUnavailableError: If the webhook is not configured,
                unreachable, or answers with an error
        """
        if not self.webhook_url:
            raise UpstreamUnavailableError(
                message="Chat webhook URL not configured",
                operation="relay_chat_message",
            )

        payload = {
            "message": message,
            "chatHistory": [_history_entry(m) for m in history],
        }

        start = time.perf_counter()
        try:
            response = await self._client.post(self.webhook_url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            record_api_call(RELAY_API_NAME, success=False, duration=time.perf_counter() - start)
            raise wrap_external_exception(e, operation="relay_chat_message") from e
        except ValueError as e:
            record_api_call(RELAY_API_NAME, success=False, duration=time.perf_counter() - start)
            raise UpstreamUnavailableError(
                message=f"Chat relay returned invalid JSON: {e}",
                operation="relay_chat_message",
                cause=e,
            ) from e

        record_api_call(RELAY_API_NAME, success=True, duration=time.perf_counter() - start)

        if isinstance(data, dict):
            reply = data.get("response") or data.get("message")
            if reply:
                return str(reply)

        logger.info("Chat relay returned no reply text, using default reply")
        return DEFAULT_REPLY

    async def close(self) -> None:
        await self._client.aclose()
