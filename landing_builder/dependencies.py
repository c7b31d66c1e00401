from typing import AsyncGenerator

from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.database import async_session
from landing_builder.core.exceptions import (
    BaseServiceError,
    ConfigurationError,
    LandingPageNotFoundError,
    ComponentNotFoundError,
    NetlifyAPIError,
    ValidationError,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting async database sessions."""
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


def http_error(e: BaseServiceError) -> HTTPException:
    """Map a service exception onto the HTTP status the API reports for it."""
    if isinstance(e, (LandingPageNotFoundError, ComponentNotFoundError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (ConfigurationError, ValidationError)):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NetlifyAPIError):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))
