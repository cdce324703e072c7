import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from .config import Settings
from .models import Base

logger = logging.getLogger(__name__)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine, with pool tuning for PostgreSQL"""
    engine_kwargs = {
        "echo": settings.sql_echo,
        "pool_pre_ping": True,  # Verify connections before use
    }

    if settings.is_postgres:
        engine_kwargs.update(
            connect_args={
                "server_settings": {
                    "application_name": "task_service",
                }
            },
            pool_size=5,
            max_overflow=10,
            pool_timeout=20,
            pool_recycle=300,  # 5 minutes
        )

    engine = create_async_engine(settings.database_url, **engine_kwargs)
    logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine, retries: int = 3, retry_delay: float = 5.0) -> None:
    """Create all tables, retrying while the database comes up"""
    for attempt in range(1, retries + 1):
        try:
            logger.info("Database connection attempt %d/%d", attempt, retries)
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created successfully")
            return
        except Exception as e:
            logger.warning("Database connection attempt %d failed: %s", attempt, e)
            if attempt < retries:
                logger.info("Retrying in %s seconds...", retry_delay)
                await asyncio.sleep(retry_delay)
            else:
                logger.error("All database connection attempts failed")
                raise


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections"""
    await engine.dispose()
    logger.info("Database connections closed")
