import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from landing_builder.core.exceptions import ConfigurationError
from landing_builder.database import async_session

router = APIRouter(tags=["health"])

logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "Landing Page Builder"}


@router.get("/health/db")
async def database_health():
    """Check database connectivity and the landing page tables"""
    try:
        async with async_session() as session:
            await session.execute(text("SELECT 1"))

            tables_result = await session.execute(
                text("SELECT table_name FROM information_schema.tables WHERE table_schema = 'public' ORDER BY table_name")
            )
            tables = [row[0] for row in tables_result]

            return {
                "status": "healthy",
                "database": "connected",
                "tables_count": len(tables),
                "tables": tables,
            }
    except (SQLAlchemyError, ConfigurationError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "database": "error",
            "error": str(e),
        }
