"""Main entry point for the wellness tracker API server"""
import logging

import uvicorn

from wellness.api import create_api_application
from wellness.config import API_HOST, API_PORT, LOG_LEVEL, validate_config
from wellness.monitoring import init_sentry

logger = logging.getLogger(__name__)


def main() -> None:
    """Main application entry point"""
    logger.info("Validating configuration...")
    validate_config()

    init_sentry()

    app = create_api_application()

    logger.info(f"Starting API server on {API_HOST}:{API_PORT}")
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
