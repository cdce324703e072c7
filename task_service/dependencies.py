from fastapi import Request

from .services import TaskService


def get_task_service(request: Request) -> TaskService:
    """Dependency returning the TaskService wired up in create_app"""
    return request.app.state.task_service
