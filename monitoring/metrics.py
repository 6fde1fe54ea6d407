"""
Monitoring - Metrics.

============================================================
RESPONSIBILITY
============================================================
Collects lightweight request and task-operation metrics and
exposes them in the Prometheus text exposition format.

- http_requests_total       counter
- http_request_duration_ms  gauge (mean of the last 1000 samples)
- tasks_total               gauge (supplied by the caller)
- task_operations_total     counter, labeled by operation

============================================================
THREAD SAFETY
============================================================
All mutations and the snapshot read run under one lock.
Rendering works on an immutable snapshot, outside the lock.

============================================================
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, Tuple, Union


logger = logging.getLogger(__name__)


MAX_DURATION_SAMPLES = 1000

CONTENT_TYPE = "text/plain; version=0.0.4"


# =============================================================
# ENUMS
# =============================================================


class TaskOperation(str, Enum):
    """Task operations that are counted."""
    CREATE = "create"
    DELETE = "delete"
    LIST = "list"


# =============================================================
# SNAPSHOT
# =============================================================


@dataclass(frozen=True)
class MetricsSnapshot:
    """Point-in-time copy of the aggregator state."""
    request_count: int
    durations: Tuple[float, ...]
    task_operations: Dict[TaskOperation, int] = field(default_factory=dict)

    @property
    def average_duration_ms(self) -> float:
        """Mean of the sampled durations, 0 when there are none."""
        if not self.durations:
            return 0.0
        return sum(self.durations) / len(self.durations)

    def operation_count(self, operation: TaskOperation) -> int:
        return self.task_operations.get(operation, 0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "request_count": self.request_count,
            "samples": len(self.durations),
            "average_duration_ms": round(self.average_duration_ms, 2),
            "task_operations": {
                op.value: self.operation_count(op) for op in TaskOperation
            },
        }


# =============================================================
# EXPOSITION FORMAT
# =============================================================


def render_prometheus(snapshot: MetricsSnapshot, task_count: int) -> str:
    """
    Render a snapshot in the Prometheus text format.

    Args:
        snapshot: Aggregator state to render
        task_count: Current number of tasks, owned by the caller

    Returns:
        Exposition text, one block per metric family
    """
    lines = [
        "# HELP http_requests_total The total number of HTTP requests",
        "# TYPE http_requests_total counter",
        f"http_requests_total {snapshot.request_count}",
        "",
        "# HELP http_request_duration_ms Average HTTP request duration in milliseconds",
        "# TYPE http_request_duration_ms gauge",
        f"http_request_duration_ms {snapshot.average_duration_ms:.2f}",
        "",
        "# HELP tasks_total The total number of tasks in the system",
        "# TYPE tasks_total gauge",
        f"tasks_total {task_count}",
        "",
        "# HELP task_operations_total The total number of task operations by type",
        "# TYPE task_operations_total counter",
    ]
    for operation in TaskOperation:
        lines.append(
            f'task_operations_total{{operation="{operation.value}"}} '
            f"{snapshot.operation_count(operation)}"
        )
    return "\n".join(lines) + "\n"


# =============================================================
# AGGREGATOR
# =============================================================


class MetricsAggregator:
    """
    Process-wide request and task-operation metrics.

    One instance is created at application start and shared by
    every request handler.
    """

    def __init__(self, max_samples: int = MAX_DURATION_SAMPLES) -> None:
        self._max_samples = max_samples
        self._lock = threading.Lock()
        self._request_count = 0
        self._durations: Deque[float] = deque(maxlen=max_samples)
        self._task_operations: Dict[TaskOperation, int] = {
            op: 0 for op in TaskOperation
        }

        logger.info(f"MetricsAggregator initialized (window={max_samples})")

    # =========================================================
    # RECORD METHODS
    # =========================================================

    def increment_request_count(self) -> None:
        with self._lock:
            self._request_count += 1

    def record_request_duration(self, duration_ms: float) -> None:
        """Append a sample; the oldest is evicted once the window is full."""
        with self._lock:
            self._durations.append(float(duration_ms))

    def increment_task_operation(self, operation: Union[TaskOperation, str]) -> None:
        operation = TaskOperation(operation)
        with self._lock:
            self._task_operations[operation] += 1

    def reset(self) -> None:
        """Zero every counter and clear the duration window."""
        with self._lock:
            self._request_count = 0
            self._durations.clear()
            for op in self._task_operations:
                self._task_operations[op] = 0

        logger.debug("Metrics reset")

    # =========================================================
    # READ METHODS
    # =========================================================

    def snapshot(self) -> MetricsSnapshot:
        """Take a consistent copy of the current state."""
        with self._lock:
            return MetricsSnapshot(
                request_count=self._request_count,
                durations=tuple(self._durations),
                task_operations=dict(self._task_operations),
            )

    def get_snapshot(self, current_task_count: int) -> str:
        """Render the current state in the Prometheus text format."""
        return render_prometheus(self.snapshot(), current_task_count)

    @property
    def window_size(self) -> int:
        with self._lock:
            return len(self._durations)

    @property
    def max_samples(self) -> int:
        return self._max_samples
