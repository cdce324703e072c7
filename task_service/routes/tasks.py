from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response

from ..dependencies import get_task_service
from ..models import TaskStatus
from ..schemas import (
    CreateTaskRequest,
    ErrorResponse,
    TaskResponse,
    UpdateTaskRequest,
    ValidationErrorResponse,
)
from ..services import TaskService
from ..validation import validate_task_fields

router = APIRouter(prefix="/tasks", tags=["tasks"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Task not found"}}
INVALID = {400: {"model": ValidationErrorResponse, "description": "Invalid input"}}


@router.get("", response_model=List[TaskResponse], summary="Get all tasks")
async def list_tasks(
    status: Optional[TaskStatus] = Query(None, description="Filter by task status"),
    service: TaskService = Depends(get_task_service),
):
    """Retrieve all tasks, newest first, optionally filtered by status"""
    tasks = await service.list_tasks(status)
    return [TaskResponse.from_task(task) for task in tasks]


@router.get("/search", response_model=List[TaskResponse], summary="Search tasks", responses=INVALID)
async def search_tasks(
    q: str = Query(..., description="Search query"),
    service: TaskService = Depends(get_task_service),
):
    """Search tasks by title (case-insensitive)"""
    tasks = await service.search_tasks(q)
    return [TaskResponse.from_task(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse, summary="Get task by ID", responses=NOT_FOUND)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id)
    return TaskResponse.from_task(task)


@router.post(
    "",
    response_model=TaskResponse,
    status_code=201,
    summary="Create a new task",
    responses=INVALID,
)
async def create_task(
    request: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Create a new task with PENDING status. ID and timestamps are generated."""
    validate_task_fields(request.title, request.description)

    task = await service.create_task(request.title, request.description)
    return TaskResponse.from_task(task)


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update a task",
    responses={**NOT_FOUND, **INVALID},
)
async def update_task(
    task_id: int,
    request: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
):
    """Replace a task's title and description, and its status when one is given"""
    validate_task_fields(request.title, request.description)

    task = await service.update_task(task_id, request.title, request.description, request.status)
    return TaskResponse.from_task(task)


@router.patch(
    "/{task_id}/status",
    response_model=TaskResponse,
    summary="Update task status",
    responses={**NOT_FOUND, **INVALID},
)
async def update_task_status(
    task_id: int,
    status: TaskStatus = Query(..., description="New status"),
    service: TaskService = Depends(get_task_service),
):
    """Update only the status of a task"""
    task = await service.update_status(task_id, status)
    return TaskResponse.from_task(task)


@router.delete(
    "/{task_id}",
    status_code=204,
    response_class=Response,
    summary="Delete a task",
    responses=NOT_FOUND,
)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
):
    """Permanently delete a task"""
    await service.delete_task(task_id)
    return Response(status_code=204)
