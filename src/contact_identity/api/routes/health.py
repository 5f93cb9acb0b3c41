"""Health check endpoint."""

import sqlalchemy as sa
import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contact_identity.api.deps import get_db

router = APIRouter()

logger = structlog.get_logger()


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)) -> JSONResponse:
    """Report whether the contact store answers a trivial query."""
    try:
        await db.execute(sa.text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("health_check_failed", error=type(e).__name__)
        return JSONResponse(status_code=500, content={"status": "unhealthy"})
    return JSONResponse(content={"status": "healthy"})
