"""
Monitoring Package.

============================================================
PURPOSE
============================================================
Operational visibility for the task service.

PRINCIPLES:
1. LIGHTWEIGHT - In-memory counters, no I/O
2. OBSERVATIONAL - Never touches task state
3. SCRAPEABLE - Prometheus text exposition format

============================================================
"""

from .metrics import (
    CONTENT_TYPE,
    MAX_DURATION_SAMPLES,
    MetricsAggregator,
    MetricsSnapshot,
    TaskOperation,
    render_prometheus,
)
from .health_checks import (
    HealthChecker,
    HealthState,
    LivenessStatus,
    ReadinessStatus,
)


__all__ = [
    # Metrics
    "CONTENT_TYPE",
    "MAX_DURATION_SAMPLES",
    "MetricsAggregator",
    "MetricsSnapshot",
    "TaskOperation",
    "render_prometheus",

    # Health
    "HealthChecker",
    "HealthState",
    "LivenessStatus",
    "ReadinessStatus",
]
