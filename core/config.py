"""
Core Module - Configuration.

============================================================
ENVIRONMENT-DERIVED CONFIGURATION
============================================================

Configuration is read once at startup from:
- Default values
- A local .env file (python-dotenv)
- Environment variables

Environment variables:
- APP_NAME     (default: task-manager)
- LOG_LEVEL    (default: info)
- JWT_SECRET   (default: empty, warning logged)
- PORT         (default: 3000)
- HOST         (default: 0.0.0.0)
- ENVIRONMENT  (default: production)

Only the presence of APP_NAME and LOG_LEVEL is observable
through the readiness probe.

============================================================
"""

import os
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


DEFAULT_APP_NAME = "task-manager"
DEFAULT_LOG_LEVEL = "info"
DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_ENVIRONMENT = "production"


def _env(name: str, default: str) -> str:
    """Read an env var, treating empty values as unset."""
    value = os.getenv(name)
    return value if value else default


# =============================================================
# APPLICATION CONFIGURATION
# =============================================================


@dataclass
class AppConfig:
    """Service configuration."""
    app_name: str = DEFAULT_APP_NAME
    log_level: str = DEFAULT_LOG_LEVEL
    jwt_secret: str = ""
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    environment: str = DEFAULT_ENVIRONMENT

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def has_secret(self) -> bool:
        return bool(self.jwt_secret)

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Load configuration from environment variables.

        Raises:
            ConfigurationError: If PORT is not an integer
        """
        raw_port = _env("PORT", str(DEFAULT_PORT))
        try:
            port = int(raw_port)
        except ValueError as e:
            raise ConfigurationError(
                f"PORT must be an integer, got {raw_port!r}",
                config_key="PORT",
                actual_value=raw_port,
                cause=e,
            ) from e

        config = cls(
            app_name=_env("APP_NAME", DEFAULT_APP_NAME),
            log_level=_env("LOG_LEVEL", DEFAULT_LOG_LEVEL),
            jwt_secret=os.getenv("JWT_SECRET", ""),
            port=port,
            host=_env("HOST", DEFAULT_HOST),
            environment=_env("ENVIRONMENT", DEFAULT_ENVIRONMENT),
        )

        if not config.has_secret:
            logger.warning("JWT_SECRET environment variable is not set")

        logger.info(
            f"Configuration loaded: app_name={config.app_name} "
            f"log_level={config.log_level} port={config.port}"
        )
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary. The secret is never included."""
        return {
            "app_name": self.app_name,
            "log_level": self.log_level,
            "port": self.port,
            "host": self.host,
            "environment": self.environment,
            "has_secret": self.has_secret,
        }


# =============================================================
# GLOBAL CONFIG INSTANCE
# =============================================================


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the process configuration, loading it on first use."""
    global _config
    if _config is None:
        load_dotenv()
        _config = AppConfig.from_env()
    return _config


def set_config(config: AppConfig) -> None:
    """Set the process configuration."""
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads env."""
    global _config
    _config = None
