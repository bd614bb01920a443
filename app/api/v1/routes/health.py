from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.session import get_session
from app.schemas import HealthOut
from app.core.logging import logger

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthOut)
async def health_check(response: Response, session: AsyncSession = Depends(get_session)):
    """
    Health check endpoint.
    
    Returns:
        Service status and whether the database answers a trivial query;
        503 when it does not
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database query failed: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "degraded", "database": "unavailable"}
    return {"status": "healthy", "database": "ok"}
