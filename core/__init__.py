"""
Core Module Package.

This package contains the infrastructure components that the
task registry, monitoring and API packages depend on.

Components:
- clock: UTC time abstraction
- config: environment-derived configuration
- exceptions: boundary error hierarchy
- logging_setup: root logger configuration
"""

from .clock import ClockProtocol, SystemClock, MockClock, to_iso8601
from .config import AppConfig, get_config, set_config, reset_config
from .exceptions import (
    TaskServiceError,
    ConfigurationError,
    TaskValidationError,
    TaskNotFoundError,
)
from .logging_setup import configure_logging, resolve_level


__all__ = [
    "ClockProtocol",
    "SystemClock",
    "MockClock",
    "to_iso8601",
    "AppConfig",
    "get_config",
    "set_config",
    "reset_config",
    "TaskServiceError",
    "ConfigurationError",
    "TaskValidationError",
    "TaskNotFoundError",
    "configure_logging",
    "resolve_level",
]
