from datetime import datetime
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import Task, TaskStatus


class CreateTaskRequest(BaseModel):
    """Request body for creating a new task"""

    title: Optional[str] = Field(None, description="Task title", examples=["Learn Docker"])
    description: Optional[str] = Field(
        None,
        description="Detailed task description (optional)",
        examples=["Complete Module 2 of the Docker/Kubernetes course"],
    )


class UpdateTaskRequest(BaseModel):
    """Request body for updating an existing task"""

    title: Optional[str] = Field(None, description="Task title", examples=["Learn Docker and Kubernetes"])
    description: Optional[str] = Field(
        None,
        description="Detailed task description (optional)",
        examples=["Complete all modules of the course"],
    )
    status: Optional[TaskStatus] = Field(None, description="Task status", examples=["IN_PROGRESS"])


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class ErrorResponse(BaseModel):
    detail: str


class ValidationErrorResponse(BaseModel):
    detail: str = "Validation failed"
    errors: Dict[str, str]
