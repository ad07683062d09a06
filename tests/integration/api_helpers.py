"""Helper utilities for API integration tests"""
from typing import Dict, Any, Optional
import httpx
from datetime import datetime


def assert_success_response(response: httpx.Response, expected_status: int = 200):
    """Assert that response is successful with expected status code"""
    assert response.status_code == expected_status, (
        f"Expected status {expected_status}, got {response.status_code}. "
        f"Response: {response.text}"
    )


def assert_error_response(
    response: httpx.Response,
    expected_status: int,
    expected_error: Optional[str] = None
):
    """Assert that response is an error body with expected status code"""
    assert response.status_code == expected_status, (
        f"Expected status {expected_status}, got {response.status_code}. "
        f"Response: {response.text}"
    )

    if expected_error:
        data = response.json()
        assert data.get("error") == expected_error, (
            f"Expected error '{expected_error}', got {data.get('error')}"
        )
        assert_has_keys(data, ["message", "detail", "request_id", "timestamp"])


def assert_has_keys(data: Dict[str, Any], required_keys: list):
    """Assert that dictionary contains all required keys"""
    for key in required_keys:
        assert key in data, f"Missing required key: {key}"


def assert_valid_timestamp(timestamp_str: str):
    """Assert that string is a valid ISO8601 timestamp"""
    try:
        datetime.fromisoformat(timestamp_str.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        raise AssertionError(f"Invalid timestamp format: {timestamp_str}")


def assert_valid_user(user: Dict[str, Any]):
    """Assert that user payload has progression fields and no credentials"""
    assert_has_keys(user, ["id", "username", "name", "level", "points", "streak_days", "best_streak"])
    assert "password_hash" not in user
    assert "password" not in user
    assert user["level"] >= 1, "Level should be at least 1"
    assert user["best_streak"] >= user["streak_days"]


def register_user(client, username: str = "tester", password: str = "secret123", name: str = "Test User"):
    """Register a user and return (auth headers, user payload)"""
    response = client.post(
        "/api/register",
        json={"username": username, "password": password, "name": name}
    )
    assert_success_response(response, 201)
    data = response.json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]
