"""
Standardized exception hierarchy for the wellness tracker
Provides rich context, consistent logging, and user-friendly error messages
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Dict, Any
from uuid import uuid4
import logging

if TYPE_CHECKING:
    import httpx

logger = logging.getLogger(__name__)


class WellnessError(Exception):
    """
    Base exception for all wellness tracker errors

    Every instance logs itself once on creation, tagged with a request id
    that is also returned in the API body so a client report can be matched
    to the log line.

    Client errors (bad input, unknown records, bad credentials) log at
    WARNING and expose their internal message as ``detail``; all other
    errors log at ERROR and return only the user-facing message.

    Example:
        raise WellnessError(
            message="Failed to record activity completion",
            user_id=7,
            operation="complete_activity",
            context={"activity_id": 3}
        )
    """

    client_error = False

    def __init__(
        self,
        message: str,
        user_id: Optional[int] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.request_id = uuid4().hex
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        level = logging.WARNING if self.client_error else logging.ERROR
        logger.log(
            level,
            f"{self.__class__.__name__} in {self.operation or 'unknown operation'}: {self.message} "
            f"(user_id={self.user_id}, request_id={self.request_id}, context={self.context})",
            exc_info=self.cause,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        body = {
            "error": self.__class__.__name__,
            "message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }
        if self.client_error:
            body["detail"] = self.message
        return body


# ==========================================
# Validation Errors (User Input)
# ==========================================

class ValidationError(WellnessError):
    """
    Raised when input fails validation

    Examples:
    - Empty chat message
    - Spending more points than the balance holds
    - Malformed achievement condition string

    Example:
        raise ValidationError(
            message="Not enough points available",
            field="points_spent",
            value=500,
            user_id=7
        )
    """

    client_error = True

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=message,
            context={"field": field, "value": value},
            **kwargs
        )

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["field"] = self.field
        return body


# ==========================================
# Storage Errors
# ==========================================

class StorageError(WellnessError):
    """
    Base class for entity store errors
    """
    pass


class RecordNotFoundError(StorageError):
    """Referenced user, activity or achievement does not exist"""

    client_error = True

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[Any] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# External API Errors
# ==========================================

class ExternalAPIError(WellnessError):
    """
    Base class for external API failures
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        status_code: Optional[int] = None,
        **kwargs
    ):
        self.service = service
        self.status_code = status_code
        kwargs.setdefault(
            "user_message",
            f"We're having trouble connecting to {service or 'an external service'}. Please try again later."
        )
        super().__init__(
            message=message,
            context={"service": service, "status_code": status_code},
            **kwargs
        )


class UpstreamUnavailableError(ExternalAPIError):
    """Chat relay webhook unreachable or returned a non-2xx status"""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message=message,
            service="Chat relay",
            **kwargs
        )


# ==========================================
# Authentication
# ==========================================

class AuthenticationError(WellnessError):
    """Authentication failed"""

    client_error = True

    def __init__(
        self,
        message: str = "Authentication failed",
        **kwargs
    ):
        super().__init__(
            message=message,
            user_message="Unauthorized",
            **kwargs
        )


# ==========================================
# Configuration
# ==========================================

class ConfigurationError(WellnessError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_external_exception(
    error: "httpx.HTTPError",
    operation: str,
    user_id: Optional[int] = None
) -> UpstreamUnavailableError:
    """
    Wrap an httpx failure from the chat relay into UpstreamUnavailableError

    Args:
        error: httpx exception raised by the request or raise_for_status()
        operation: What operation was being performed
        user_id: User ID if applicable

    Example:
        try:
            response = await client.post(url, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise wrap_external_exception(e, operation="relay_chat_message")
    """
    import httpx

    if isinstance(error, httpx.TimeoutException):
        return UpstreamUnavailableError(
            message=f"Chat relay request timed out: {str(error)}",
            user_id=user_id,
            operation=operation,
            cause=error
        )
    if isinstance(error, httpx.HTTPStatusError):
        return UpstreamUnavailableError(
            message=f"Chat relay returned error: {error.response.status_code}",
            status_code=error.response.status_code,
            user_id=user_id,
            operation=operation,
            cause=error
        )
    return UpstreamUnavailableError(
        message=f"Chat relay request failed: {str(error)}",
        user_id=user_id,
        operation=operation,
        cause=error
    )
