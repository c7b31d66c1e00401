# landing_builder/main.py

import logging
import os
import subprocess
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from landing_builder.core.config import get_settings
from landing_builder.core.logging_config import configure_logging
from landing_builder.database import get_engine
from landing_builder.routes import ai, deployments, health, media, pages

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if os.getenv('RUN_MIGRATIONS', 'false').lower() == 'true':
        logger.info("Running database migrations...")
        result = subprocess.run(['alembic', 'upgrade', 'head'], capture_output=True, text=True)
        if result.returncode == 0:
            logger.info("Migrations completed successfully")
        else:
            logger.error(f"Migration failed: {result.stderr}")

    logger.info(f"Starting Landing Page Builder ({settings.ENVIRONMENT})")
    try:
        yield
    finally:
        if settings.async_database_url:
            await get_engine().dispose()


app = FastAPI(
    title="Landing Page Builder",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def proxy_headers_middleware(request: Request, call_next):
    # Honour X-Forwarded-Proto behind the hosting proxy
    if request.headers.get("x-forwarded-proto") == "https":
        request.scope["scheme"] = "https"
    return await call_next(request)


app.include_router(pages.router)
app.include_router(deployments.router)
app.include_router(ai.router)
app.include_router(media.router)
app.include_router(health.router)
