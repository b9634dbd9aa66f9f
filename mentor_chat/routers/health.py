"""Health check endpoints."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from ..core.config import settings
from ..core.database import get_db, health_check_db
from ..core.redis_client import redis_manager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["Health"])

@router.get("/")
async def health_check():
    """Basic health check"""
    return {
        "status": "healthy",
        "service": "Mentor Chat API",
        "version": settings.app_version,
    }

@router.get("/db-health")
async def database_health(session: AsyncSession = Depends(get_db)):
    """Database health check using the session dependency"""
    healthy = await health_check_db(session)
    return {
        "status": "healthy" if healthy else "unhealthy",
        "database": "healthy" if healthy else "unreachable",
        "realtime": "redis" if redis_manager.enabled else "in-process",
    }
