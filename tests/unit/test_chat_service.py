"""Unit tests for ChatService"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from wellness.exceptions import UpstreamUnavailableError, ValidationError
from wellness.models import ChatRole
from wellness.services.chat_service import ChatService, FALLBACK_REPLY


@pytest.fixture
def mock_relay():
    """Chat relay with a canned reply"""
    relay = MagicMock()
    relay.reply = AsyncMock(return_value="Try a short walk outside.")
    return relay


@pytest.fixture
def chat_service(store, mock_relay):
    return ChatService(store, mock_relay)


@pytest.mark.asyncio
async def test_send_message_stores_both_sides(chat_service, store, user):
    reply = await chat_service.send_message(user.id, "I can't focus")

    history = await store.get_chat_messages_by_user_id(user.id)
    assert [(m.role, m.content) for m in history] == [
        (ChatRole.USER, "I can't focus"),
        (ChatRole.ASSISTANT, "Try a short walk outside."),
    ]
    assert reply == history[-1]


@pytest.mark.asyncio
async def test_history_sent_includes_new_message(chat_service, mock_relay, store, user):
    await store.create_chat_message(user.id, ChatRole.USER, "earlier")
    await store.create_chat_message(user.id, ChatRole.ASSISTANT, "earlier reply")

    await chat_service.send_message(user.id, "now")

    message, history = mock_relay.reply.call_args.args
    assert message == "now"
    assert [m.content for m in history] == ["earlier", "earlier reply", "now"]


@pytest.mark.asyncio
async def test_relay_failure_stores_fallback(chat_service, mock_relay, store, user):
    """An unreachable agent still yields a stored assistant message"""
    mock_relay.reply.side_effect = UpstreamUnavailableError("webhook down")

    reply = await chat_service.send_message(user.id, "hello?")

    assert reply.role == ChatRole.ASSISTANT
    assert reply.content == FALLBACK_REPLY
    assert len(await store.get_chat_messages_by_user_id(user.id)) == 2


@pytest.mark.asyncio
async def test_unexpected_error_propagates(chat_service, mock_relay, store, user):
    """Only upstream failures are converted to the fallback reply"""
    mock_relay.reply.side_effect = KeyError("bug")

    with pytest.raises(KeyError):
        await chat_service.send_message(user.id, "hello?")


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   "])
async def test_empty_message_rejected(chat_service, mock_relay, store, user, content):
    with pytest.raises(ValidationError) as exc_info:
        await chat_service.send_message(user.id, content)

    assert exc_info.value.user_message == "Message is required"
    assert await store.get_chat_messages_by_user_id(user.id) == []
    mock_relay.reply.assert_not_called()


@pytest.mark.asyncio
async def test_get_history(chat_service, user):
    await chat_service.send_message(user.id, "one")
    await chat_service.send_message(user.id, "two")

    history = await chat_service.get_history(user.id)

    assert [m.content for m in history] == ["one", "Try a short walk outside.", "two", "Try a short walk outside."]
