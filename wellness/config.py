"""Configuration management"""
import os
from dotenv import load_dotenv

from wellness.exceptions import ConfigurationError

load_dotenv()

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# API server
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "5000"))
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"

# Sessions
SESSION_TTL_HOURS: int = int(os.getenv("SESSION_TTL_HOURS", "24"))

# Catalog
SEED_CATALOG: bool = os.getenv("SEED_CATALOG", "true").lower() == "true"

# Chat relay (external conversational agent webhook)
CHAT_WEBHOOK_URL: str = os.getenv("CHAT_WEBHOOK_URL", "")
CHAT_WEBHOOK_TIMEOUT: float = float(os.getenv("CHAT_WEBHOOK_TIMEOUT", "30"))

# Sentry
ENABLE_SENTRY: bool = os.getenv("ENABLE_SENTRY", "false").lower() == "true"
SENTRY_DSN: str = os.getenv("SENTRY_DSN", "")
SENTRY_ENVIRONMENT: str = os.getenv("SENTRY_ENVIRONMENT", "development")
SENTRY_TRACES_SAMPLE_RATE: float = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))


# Validation
def validate_config() -> None:
    """Validate configuration values"""
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ConfigurationError(
            f"LOG_LEVEL must be a logging level name, got {LOG_LEVEL!r}",
            config_key="LOG_LEVEL",
        )
    if CHAT_WEBHOOK_TIMEOUT <= 0:
        raise ConfigurationError("CHAT_WEBHOOK_TIMEOUT must be positive", config_key="CHAT_WEBHOOK_TIMEOUT")
    if SESSION_TTL_HOURS <= 0:
        raise ConfigurationError("SESSION_TTL_HOURS must be positive", config_key="SESSION_TTL_HOURS")
    if ENABLE_SENTRY and not SENTRY_DSN:
        raise ConfigurationError("SENTRY_DSN is required when ENABLE_SENTRY is true", config_key="SENTRY_DSN")
    # Chat webhook is optional: without it every reply is the fallback message
