# landing_builder/database.py

# type: ignore[misc]
from functools import lru_cache
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine
from sqlalchemy.orm import declarative_base
from contextlib import asynccontextmanager

from landing_builder.core.config import get_settings
from landing_builder.core.exceptions import ConfigurationError

Base = declarative_base()


@lru_cache()
def get_engine() -> AsyncEngine:
    """Build the async engine on first use so imports never need a database."""
    database_url = get_settings().async_database_url
    if not database_url:
        raise ConfigurationError("DATABASE_URL is not set in environment variables")

    return create_async_engine(
        database_url,
        echo=False,
        future=True,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
        pool_recycle=1800,
    )


@lru_cache()
def get_sessionmaker() -> async_sessionmaker:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False
    )


def async_session() -> AsyncSession:
    return get_sessionmaker()()


@asynccontextmanager
async def get_session() -> AsyncSession:
    session = async_session()
    try:
        yield session
    finally:
        await session.close()
