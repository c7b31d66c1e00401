# landing_builder/core/config.py

import os
from functools import lru_cache
from typing import Optional
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # Database settings (Supabase Postgres connection string)
    DATABASE_URL: str = ""

    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_STORAGE_BUCKET: str = "component-media"

    # Placeholder until auth is wired in; used for storage paths only
    MEDIA_PLACEHOLDER_USER_ID: str = "f75c2dc6-f875-4136-9f07-861cfbb837c1"

    # Netlify API
    NETLIFY_ACCESS_TOKEN: str = ""
    NETLIFY_API_URL: str = "https://api.netlify.com/api/v1"

    # Generative AI (OpenAI-compatible endpoint)
    AI_API_KEY: str = ""
    AI_BASE_URL: Optional[str] = None
    AI_TEXT_MODEL: str = "gpt-4"
    AI_IMAGE_MODEL: str = "dall-e-3"

    # Deployment
    DEPLOY_POLL_INTERVAL_SECONDS: float = 3.0
    DEFAULT_OUTPUT_FORMAT: str = "html"
    HTTP_TIMEOUT: float = 30.0

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists(os.environ.get('ENV_FILE', '.env')) else None,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten for the asyncpg driver."""
        url = self.DATABASE_URL or os.environ.get('DATABASE_URL', '')
        if url.startswith('postgresql://'):
            url = url.replace('postgresql://', 'postgresql+asyncpg://', 1)
        elif url.startswith('postgres://'):
            url = url.replace('postgres://', 'postgresql+asyncpg://', 1)
        return url


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every request"""
    return Settings()


def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
