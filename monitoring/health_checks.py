"""
Monitoring - Health Checks.

============================================================
RESPONSIBILITY
============================================================
Answers the liveness and readiness probes.

- Liveness: the process is up; reports uptime
- Readiness: required configuration (app name, log level)
  is present

============================================================
HEALTH STATES
============================================================
- HEALTHY:   process is serving requests
- READY:     configuration present, traffic may be routed
- NOT_READY: required configuration missing

============================================================
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from core.clock import ClockProtocol, SystemClock
from core.config import AppConfig


logger = logging.getLogger(__name__)


class HealthState(str, Enum):
    HEALTHY = "healthy"
    READY = "ready"
    NOT_READY = "not ready"


@dataclass
class LivenessStatus:
    """Result of the liveness probe."""
    status: HealthState
    timestamp: str
    app: str
    uptime: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "timestamp": self.timestamp,
            "app": self.app,
            "uptime": self.uptime,
        }


@dataclass
class ReadinessStatus:
    """Result of the readiness probe."""
    status: HealthState
    timestamp: str
    app: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        return self.status == HealthState.READY

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "status": self.status.value,
            "timestamp": self.timestamp,
        }
        if self.app is not None:
            data["app"] = self.app
        if self.message is not None:
            data["message"] = self.message
        return data


class HealthChecker:
    """Liveness and readiness probes backed by configuration presence."""

    def __init__(
        self,
        config: AppConfig,
        clock: Optional[ClockProtocol] = None,
    ) -> None:
        """
        Initialize health checker.

        Args:
            config: Application configuration
            clock: Clock used for timestamps and uptime
        """
        self._config = config
        self._clock = clock or SystemClock()
        self._started_at = self._clock.monotonic()

    def uptime_seconds(self) -> float:
        """
        Seconds since this checker was built.

        create_app() builds the checker at startup, so under uvicorn's
        factory loading this is process uptime to within the import time.
        """
        return max(0.0, self._clock.monotonic() - self._started_at)

    def check_liveness(self) -> LivenessStatus:
        return LivenessStatus(
            status=HealthState.HEALTHY,
            timestamp=self._clock.format_iso(),
            app=self._config.app_name,
            uptime=self.uptime_seconds(),
        )

    def check_readiness(self) -> ReadinessStatus:
        """
        Check whether required configuration is present.

        The JWT secret is not required for readiness.
        """
        timestamp = self._clock.format_iso()

        if not (self._config.app_name and self._config.log_level):
            logger.warning("Readiness check failed: required configuration missing")
            return ReadinessStatus(
                status=HealthState.NOT_READY,
                timestamp=timestamp,
                message="Required configuration missing",
            )

        return ReadinessStatus(
            status=HealthState.READY,
            timestamp=timestamp,
            app=self._config.app_name,
        )
