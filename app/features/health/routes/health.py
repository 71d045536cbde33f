from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.platform.db.session import get_db
from app.platform.logger import get_logger
from app.platform.response import api_response

logger = get_logger(__name__)

router = APIRouter()

@router.get("/health", tags=["health"])
async def health_check(db: AsyncSession = Depends(get_db)):
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        return api_response(
            data={"status": "degraded", "service": "Meta Leads", "database": "unavailable"},
            message="Database unavailable",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return api_response(
        data={"status": "ok", "service": "Meta Leads", "database": "ok"},
        message="Service is healthy",
        status_code=status.HTTP_200_OK,
    )
