"""
Core Module - Logging Setup.

Configures the root logger once per process. Every module logs
through logging.getLogger(__name__).
"""

import logging
from typing import Optional

from .config import AppConfig


LOG_FORMAT = "%(asctime)s | %(levelname)s | {app} | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def resolve_level(level_name: Optional[str]) -> int:
    """Map a LOG_LEVEL value to a logging level. Unknown values map to INFO."""
    if not level_name:
        return logging.INFO
    return _LEVELS.get(level_name.strip().lower(), logging.INFO)


def configure_logging(config: AppConfig, force: bool = False) -> None:
    """
    Configure root logging for the service.

    Args:
        config: Application configuration (log level and app name)
        force: Replace handlers installed by an earlier call
    """
    logging.basicConfig(
        level=resolve_level(config.log_level),
        format=LOG_FORMAT.format(app=config.app_name.replace("%", "%%")),
        datefmt=DATE_FORMAT,
        force=force,
    )
