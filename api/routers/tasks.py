"""
Task CRUD endpoints.

Every handler counts the request in the metrics aggregator.
Validation failures become 400, unknown ids 404, anything
unexpected is logged and becomes 500.
"""
import logging
import time
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError

from api.dependencies import get_metrics, get_task_registry
from api.schemas import (
    DeleteResponse,
    ErrorResponse,
    TaskCreate,
    TaskListResponse,
    TaskResponse,
    TaskSchema,
    TaskUpdate,
)
from core.exceptions import TaskNotFoundError, TaskServiceError, TaskValidationError
from monitoring.metrics import MetricsAggregator, TaskOperation
from task_registry.registry import TaskRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["Tasks"])

TITLE_REQUIRED = "Title is required and must be a non-empty string"
TITLE_INVALID = "Title must be a non-empty string"
COMPLETED_INVALID = "Completed must be a boolean"
BODY_INVALID = "Request body must be a JSON object"

_UPDATE_FIELD_ERRORS = {
    "title": TITLE_INVALID,
    "completed": COMPLETED_INVALID,
}

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


# =============================================================
# HELPERS
# =============================================================

def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _update_error(exc: ValidationError) -> Tuple[str, Optional[str]]:
    """Pick the client message for the first invalid update field."""
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc and loc[0] in _UPDATE_FIELD_ERRORS:
            return _UPDATE_FIELD_ERRORS[loc[0]], loc[0]
    return BODY_INVALID, None


# =============================================================
# ENDPOINTS
# =============================================================

@router.get("", response_model=TaskListResponse, responses=_ERROR_RESPONSES)
def list_tasks(
    registry: TaskRegistry = Depends(get_task_registry),
    metrics: MetricsAggregator = Depends(get_metrics),
):
    """List every task in creation order."""
    started = time.perf_counter()
    try:
        logger.debug("GET /tasks")
        metrics.increment_request_count()
        metrics.increment_task_operation(TaskOperation.LIST)

        tasks = registry.get_all()
        metrics.record_request_duration(_elapsed_ms(started))

        return TaskListResponse(tasks=[TaskSchema.from_task(t) for t in tasks])
    except Exception as e:
        logger.error(f"Error fetching tasks: {e}")
        raise TaskServiceError("Failed to fetch tasks", cause=e) from e


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_task(
    request: Request,
    registry: TaskRegistry = Depends(get_task_registry),
    metrics: MetricsAggregator = Depends(get_metrics),
):
    """
    Create a task.

    Body: {"title": "<non-empty string>"}
    """
    started = time.perf_counter()
    try:
        logger.debug("POST /tasks")
        metrics.increment_request_count()

        body = await request.json()
        try:
            payload = TaskCreate.model_validate(body)
        except ValidationError as e:
            raise TaskValidationError(TITLE_REQUIRED, field="title", cause=e) from e

        metrics.increment_task_operation(TaskOperation.CREATE)
        task = registry.create(payload.title)
        metrics.record_request_duration(_elapsed_ms(started))

        return TaskResponse(task=TaskSchema.from_task(task))
    except TaskServiceError:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {e}")
        raise TaskServiceError("Failed to create task", cause=e) from e


@router.patch("/{task_id}", response_model=TaskResponse, responses=_ERROR_RESPONSES)
async def update_task(
    task_id: str,
    request: Request,
    registry: TaskRegistry = Depends(get_task_registry),
    metrics: MetricsAggregator = Depends(get_metrics),
):
    """
    Update a task's title and/or completed flag.

    Omitted fields are left unchanged.
    """
    started = time.perf_counter()
    try:
        logger.debug(f"PATCH /tasks/{task_id}")
        metrics.increment_request_count()

        body = await request.json()
        try:
            payload = TaskUpdate.model_validate(body)
        except ValidationError as e:
            message, field = _update_error(e)
            raise TaskValidationError(message, field=field, cause=e) from e

        task = registry.update(task_id, title=payload.title, completed=payload.completed)
        metrics.record_request_duration(_elapsed_ms(started))

        if task is None:
            raise TaskNotFoundError(task_id)

        return TaskResponse(task=TaskSchema.from_task(task))
    except TaskServiceError:
        raise
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}")
        raise TaskServiceError("Failed to update task", cause=e) from e


@router.delete("/{task_id}", response_model=DeleteResponse, responses=_ERROR_RESPONSES)
def delete_task(
    task_id: str,
    registry: TaskRegistry = Depends(get_task_registry),
    metrics: MetricsAggregator = Depends(get_metrics),
):
    """Delete a task."""
    started = time.perf_counter()
    try:
        logger.debug(f"DELETE /tasks/{task_id}")
        metrics.increment_request_count()

        deleted = registry.delete(task_id)
        metrics.record_request_duration(_elapsed_ms(started))

        if not deleted:
            raise TaskNotFoundError(task_id)

        metrics.increment_task_operation(TaskOperation.DELETE)
        return DeleteResponse(success=True)
    except TaskServiceError:
        raise
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}")
        raise TaskServiceError("Failed to delete task", cause=e) from e
