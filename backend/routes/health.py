"""
Health check endpoint.
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db, ping_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check - verifies database connectivity."""
    if await ping_db(db):
        return {
            "status": "ok",
            "message": "CS2 loadout API is running",
            "environment": settings.environment,
            "database_connected": True,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "unhealthy",
            "environment": settings.environment,
            "database_connected": False,
        },
    )
