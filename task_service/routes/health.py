import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..dependencies import get_task_service
from ..exceptions import StorageFault
from ..models import utcnow
from ..services import TaskService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/")
async def root(request: Request):
    """Root endpoint"""
    return {
        "service": request.app.title,
        "status": "running",
        "timestamp": utcnow().isoformat(),
    }


@router.get("/health/live")
async def liveness():
    """Liveness probe: the process is up and serving requests"""
    return {"status": "UP"}


@router.get("/health/ready")
async def readiness(service: TaskService = Depends(get_task_service)):
    """Readiness probe: the database answers a trivial query"""
    try:
        await service.check_storage()
    except StorageFault as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(status_code=503, content={"status": "DOWN"})
    return {"status": "UP"}


@router.get("/info")
async def info(request: Request):
    """Service information endpoint"""
    started_at: datetime = request.app.state.started_at
    return {
        "service": request.app.title,
        "version": request.app.version,
        "startedAt": started_at.isoformat(),
        "uptime": round((utcnow() - started_at).total_seconds(), 3),
    }
