import logging
from datetime import datetime, timedelta
from typing import List, Optional

from .exceptions import NotFoundError
from .models import Task, TaskStatus, utcnow
from .store import TaskStore
from .validation import validate_task_fields

logger = logging.getLogger(__name__)


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged forward if the clock has not moved past previous"""
    now = utcnow()
    if previous is not None and now <= previous:
        now = previous + timedelta(microseconds=1)
    return now


class TaskService:
    """
    Business rules for tasks.

    Holds no state between calls. Updates read the current row and write it
    back without any compare-and-swap, so concurrent writers to the same task
    are last-writer-wins.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    async def create_task(self, title: str, description: Optional[str] = None) -> Task:
        """Create a new task; new tasks always start as PENDING"""
        validate_task_fields(title, description)

        now = utcnow()
        task = Task(
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        task = await self.store.insert(task)
        logger.info("Created task id=%s title=%r", task.id, task.title)
        return task

    async def get_task(self, task_id: int) -> Task:
        task = await self.store.get(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    async def update_task(
        self,
        task_id: int,
        title: str,
        description: Optional[str],
        status: Optional[TaskStatus] = None,
    ) -> Task:
        """Overwrite title and description; status only when one is given"""
        validate_task_fields(title, description)

        task = await self.get_task(task_id)
        task.title = title
        task.description = description
        if status is not None:
            task.status = status
        task.updated_at = _next_timestamp(task.updated_at)

        task = await self.store.save(task)
        logger.info("Updated task id=%s status=%s", task.id, task.status.value)
        return task

    async def update_status(self, task_id: int, status: TaskStatus) -> Task:
        task = await self.get_task(task_id)
        task.status = status
        task.updated_at = _next_timestamp(task.updated_at)

        task = await self.store.save(task)
        logger.info("Task id=%s moved to %s", task.id, task.status.value)
        return task

    async def delete_task(self, task_id: int) -> None:
        if not await self.store.delete(task_id):
            raise NotFoundError(task_id)
        logger.info("Deleted task id=%s", task_id)

    async def list_tasks(self, status: Optional[TaskStatus] = None) -> List[Task]:
        if status is not None:
            return await self.store.list_by_status(status)
        return await self.store.list_all()

    async def search_tasks(self, query: str) -> List[Task]:
        return await self.store.search_by_title(query)

    async def check_storage(self) -> None:
        """Raise StorageFault if the datastore cannot be reached"""
        await self.store.ping()
