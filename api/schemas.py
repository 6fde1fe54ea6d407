"""
Pydantic schemas for the task service API.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator

from task_registry.models import Task

# =======================
# REQUESTS
# =======================

class TaskCreate(BaseModel):
    title: StrictStr

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class TaskUpdate(BaseModel):
    """Partial update. Omitted fields are left unchanged; unknown fields are ignored."""
    title: Optional[StrictStr] = None
    completed: Optional[StrictBool] = None

    @field_validator("title", "completed", mode="before")
    @classmethod
    def reject_explicit_null(cls, value):
        # Only runs for fields present in the body.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value

# =======================
# TASK RESPONSES
# =======================

class TaskSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    completed: bool
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskSchema":
        return cls.model_validate(task.to_dict())


class TaskResponse(BaseModel):
    task: TaskSchema


class TaskListResponse(BaseModel):
    tasks: List[TaskSchema]


class DeleteResponse(BaseModel):
    success: bool

# =======================
# PROBES
# =======================

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    app: str
    uptime: float


class ReadyResponse(BaseModel):
    status: str
    timestamp: str
    app: Optional[str] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
