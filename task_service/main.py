import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .db import close_db, create_engine, create_session_factory, init_db
from .exceptions import NotFoundError, StorageFault, ValidationError
from .logging_setup import setup_logging
from .models import utcnow
from .routes import health, tasks
from .services import TaskService
from .store import TaskStore

logger = logging.getLogger(__name__)

API_DESCRIPTION = """
A simple task management REST API.

## Features
- Create, read, update, and delete tasks
- Filter tasks by status
- Search tasks by title
"""

TAGS_METADATA = [
    {"name": "tasks", "description": "Task management operations"},
    {"name": "health", "description": "Liveness, readiness and service info"},
]


def _field_errors(exc: RequestValidationError) -> dict:
    errors = {}
    for error in exc.errors():
        # integer parts are list indexes or JSON decode offsets, not field names
        loc = [
            str(part)
            for part in error.get("loc", ())
            if not isinstance(part, int) and part not in ("body", "query", "path")
        ]
        field = ".".join(loc) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"detail": "Validation failed", "errors": exc.errors})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": "Validation failed", "errors": _field_errors(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageFault)
    async def storage_fault_handler(request: Request, exc: StorageFault):
        return JSONResponse(status_code=500, content={"detail": "Storage failure"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app and wire store -> service onto app.state"""
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        try:
            await init_db(engine, settings.db_init_retries, settings.db_init_retry_delay)
        except Exception as e:
            logger.warning("Database initialization failed: %s", e)
            logger.warning("Application will start but /health/ready will report DOWN")
        yield
        await close_db(engine)

    app = FastAPI(
        title="Task Service API",
        description=API_DESCRIPTION,
        version="1.0.0",
        contact={"name": "Task Service Team", "email": "support@example.com"},
        license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.started_at = utcnow()
    app.state.task_service = TaskService(TaskStore(session_factory))

    logger.info("CORS origins: %s", settings.allowed_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    register_exception_handlers(app)

    app.include_router(tasks.router, prefix="/api")
    app.include_router(health.router)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "task_service.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
