#!/usr/bin/env python
"""
Task Service Server Runner.

Usage:
    python run_server.py

Or with PM2:
    pm2 start run_server.py --interpreter python

Configuration comes from the environment (or a local .env):
APP_NAME, LOG_LEVEL, JWT_SECRET, PORT, HOST, ENVIRONMENT.
"""

import sys
import logging
import uvicorn

from core.config import get_config
from core.exceptions import ConfigurationError
from core.logging_setup import configure_logging, resolve_level


logger = logging.getLogger(__name__)


def main() -> int:
    """Run the task service API server."""
    try:
        config = get_config()
    except ConfigurationError as e:
        logging.basicConfig(level=logging.ERROR)
        logger.error(f"Invalid configuration: {e.to_dict()}")
        return 1

    configure_logging(config)

    logger.info(f"Starting {config.app_name} on {config.host}:{config.port}")

    try:
        uvicorn.run(
            "api.main:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=config.is_development,
            log_level=logging.getLevelName(resolve_level(config.log_level)).lower(),
            access_log=True,
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
