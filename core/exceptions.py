"""
Core Module - Exceptions.

============================================================
RESPONSIBILITY
============================================================
Defines the exceptions surfaced at the HTTP boundary.

- The task registry and metrics aggregator never raise
- Routers raise these to produce an error response
- Each class carries the HTTP status it maps to

============================================================
EXCEPTION HIERARCHY
============================================================
TaskServiceError (base, 500)
├── ConfigurationError
├── TaskValidationError (400)
└── TaskNotFoundError   (404)

============================================================
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


# ============================================================
# BASE EXCEPTION
# ============================================================

class TaskServiceError(Exception):
    """
    Base exception for all task service errors.

    All exceptions carry:
    - message: the single error string returned to clients
    - context: for debugging
    - status_code: HTTP status used by the API layer
    - timestamp: when the error occurred
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)

        self.message = message
        self.context = context or {}
        self.cause = cause
        self.timestamp = datetime.now(timezone.utc)

        if cause:
            self.context["cause_type"] = type(cause).__name__
            self.context["cause_message"] = str(cause)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for logging."""
        return {
            "type": type(self).__name__,
            "message": self.message,
            "status_code": self.status_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_response_body(self) -> Dict[str, str]:
        """Client-facing body: a single error string."""
        return {"error": self.message}


# ============================================================
# CONFIGURATION ERRORS
# ============================================================

class ConfigurationError(TaskServiceError):
    """Error in environment-derived configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.pop("context", {})

        if config_key:
            context["config_key"] = config_key
        if actual_value is not None:
            context["actual_value"] = str(actual_value)[:100]

        super().__init__(message, context=context, **kwargs)


# ============================================================
# REQUEST ERRORS
# ============================================================

class TaskValidationError(TaskServiceError):
    """Malformed, missing or wrong-typed request input."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        super().__init__(message, context=context, **kwargs)
        self.field = field


class TaskNotFoundError(TaskServiceError):
    """Operation targeted a task id that is not in the registry."""

    status_code = 404

    def __init__(self, task_id: str, message: str = "Task not found", **kwargs):
        context = kwargs.pop("context", {})
        context["task_id"] = task_id
        super().__init__(message, context=context, **kwargs)
        self.task_id = task_id


__all__ = [
    "TaskServiceError",
    "ConfigurationError",
    "TaskValidationError",
    "TaskNotFoundError",
]
