import asyncio
import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from .exceptions import StorageFault
from .models import Task, TaskStatus

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str):
    try:
        yield
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        # asyncpg raises bare OSError subclasses when it cannot connect
        logger.exception("Storage failure during %s", operation)
        raise StorageFault(f"Storage failure during {operation}") from e


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class TaskStore:
    """
    Persistence for Task rows.

    Every method opens its own session and commits at most one record, so the
    datastore's per-statement atomicity is the only consistency guarantee.
    Returned tasks are detached from their session.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def insert(self, task: Task) -> Task:
        """Persist a new task; the database assigns its id"""
        with _storage_errors("insert"):
            async with self._session_factory() as session:
                session.add(task)
                await session.commit()
                await session.refresh(task)
                return task

    async def get(self, task_id: int) -> Optional[Task]:
        """Get a task by ID"""
        with _storage_errors("get"):
            async with self._session_factory() as session:
                return await session.get(Task, task_id)

    async def list_all(self) -> List[Task]:
        """All tasks, newest first"""
        query = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        return await self._fetch(query, "list_all")

    async def list_by_status(self, status: TaskStatus) -> List[Task]:
        query = select(Task).filter(Task.status == status).order_by(Task.id)
        return await self._fetch(query, "list_by_status")

    async def search_by_title(self, substring: str) -> List[Task]:
        """Tasks whose title contains substring, ignoring case"""
        pattern = f"%{_escape_like(substring)}%"
        query = select(Task).filter(Task.title.ilike(pattern, escape="\\")).order_by(Task.id)
        return await self._fetch(query, "search_by_title")

    async def save(self, task: Task) -> Task:
        """Write back a mutated task; the caller has already stamped updated_at"""
        with _storage_errors("save"):
            async with self._session_factory() as session:
                merged = await session.merge(task)
                await session.commit()
                await session.refresh(merged)
                return merged

    async def delete(self, task_id: int) -> bool:
        """Delete a task, returning False if it did not exist"""
        with _storage_errors("delete"):
            async with self._session_factory() as session:
                db_task = await session.get(Task, task_id)
                if not db_task:
                    return False

                await session.delete(db_task)
                await session.commit()
                return True

    async def ping(self) -> None:
        with _storage_errors("ping"):
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))

    async def _fetch(self, query, operation: str) -> List[Task]:
        with _storage_errors(operation):
            async with self._session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())
