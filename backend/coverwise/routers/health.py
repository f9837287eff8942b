import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coverwise.config import settings
from coverwise.database import get_db

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "environment": settings.environment,
                "database": "disconnected",
                "error": "Database connection failed",
            },
        )

    return {
        "status": "healthy",
        "timestamp": timestamp,
        "environment": settings.environment,
        "database": "connected",
    }


@router.get("/ready")
async def ready():
    return {"ready": True, "timestamp": datetime.now(timezone.utc).isoformat()}
