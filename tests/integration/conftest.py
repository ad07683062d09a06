"""Shared fixtures for API integration tests"""
import json
import pytest
import httpx
from fastapi.testclient import TestClient

from wellness.api import create_api_application
from wellness.api.middleware import limiter
from wellness.chat import ChatRelay
from wellness.db import MemoryStore
from tests.integration.api_helpers import register_user

WEBHOOK_URL = "https://agent.example.test/webhook"


class FakeWebhook:
    """Scriptable stand-in for the chat agent webhook"""

    def __init__(self):
        self.status_code = 200
        self.body = {"response": "That sounds hard. Want to try a breathing exercise?"}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        return httpx.Response(self.status_code, json=self.body)


@pytest.fixture
def webhook():
    return FakeWebhook()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store, webhook):
    """Test client for a fresh app with the default catalog seeded"""
    was_enabled = limiter.enabled
    limiter.enabled = False

    relay = ChatRelay(
        webhook_url=WEBHOOK_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(webhook)),
    )
    app = create_api_application(store=store, chat_relay=relay)

    with TestClient(app) as test_client:
        yield test_client

    limiter.enabled = was_enabled


@pytest.fixture
def auth_headers(client):
    """Valid authentication headers for a freshly registered user"""
    headers, _ = register_user(client)
    return headers
