"""
Purpose: Component media (images/videos) stored in the Supabase ``component-media`` bucket.

Objects live at ``{user_id}/{component_id}/{field}-{timestamp_ms}.{ext}`` and the public
URL is written into the component's ``media_urls`` map under ``field``.

Every public method reports failure through its return value (result object, False,
None or {}) and logs the cause; nothing here raises to the caller.

The user id is MEDIA_PLACEHOLDER_USER_ID until authentication is wired in.
"""

import logging
import os
import time
from typing import Optional, Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.core.config import Settings, get_settings
from landing_builder.core.exceptions import BaseServiceError
from landing_builder.schemas.media import MediaUploadResult
from landing_builder.services.landing_page_service import LandingPageService
from landing_builder.services.supabase.storage import SupabaseStorageClient

logger = logging.getLogger(__name__)


class MediaService:
    def __init__(
        self,
        db: AsyncSession,
        settings: Optional[Settings] = None,
        storage: Optional[SupabaseStorageClient] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.pages = LandingPageService(db)
        self._storage = storage

    @property
    def storage(self) -> SupabaseStorageClient:
        if self._storage is None:
            self._storage = SupabaseStorageClient(
                self.settings.SUPABASE_URL,
                self.settings.SUPABASE_SERVICE_ROLE_KEY,
                self.settings.SUPABASE_STORAGE_BUCKET,
            )
        return self._storage

    @property
    def user_id(self) -> str:
        return self.settings.MEDIA_PLACEHOLDER_USER_ID

    def build_path(self, component_id: str, field: str, filename: str) -> str:
        ext = os.path.splitext(filename)[1].lstrip(".").lower() or "bin"
        return f"{self.user_id}/{component_id}/{field}-{int(time.time() * 1000)}.{ext}"

    async def upload_file(
        self,
        data: bytes,
        filename: str,
        component_id: str,
        field: str,
        content_type: str = "application/octet-stream",
    ) -> MediaUploadResult:
        try:
            path = self.build_path(component_id, field, filename)
            stored = await self.storage.upload(path, data, content_type)
            url = self.storage.public_url(stored)
            logger.info(f"Uploaded {filename} for component {component_id}.{field} -> {stored}")
            return MediaUploadResult(success=True, url=url, path=stored)
        except BaseServiceError as e:
            logger.error(f"Media upload failed for {component_id}.{field}: {e}")
            return MediaUploadResult(success=False, error=str(e))

    async def update_component_media_url(self, component_id: str, field: str, url: str) -> bool:
        try:
            await self.pages.set_media_url(component_id, field, url)
            return True
        except (BaseServiceError, SQLAlchemyError) as e:
            logger.error(f"Failed to update media URL for {component_id}.{field}: {e}")
            await self.db.rollback()
            return False

    async def remove_component_media_url(self, component_id: str, field: str) -> bool:
        """
        Drop one key from the component's media map.

        When the removed URL points into our bucket, the stored object is deleted too.
        A failed object delete is logged; the map update stands.
        """
        try:
            removed = await self.pages.pop_media_url(component_id, field)
        except (BaseServiceError, SQLAlchemyError) as e:
            logger.error(f"Failed to remove media URL for {component_id}.{field}: {e}")
            await self.db.rollback()
            return False

        if removed and self.settings.SUPABASE_STORAGE_BUCKET in removed:
            try:
                path = self.storage.path_from_url(removed)
                if path:
                    await self.storage.remove([path])
                    logger.info(f"Deleted stored object {path}")
            except BaseServiceError as e:
                logger.warning(f"Could not delete stored object for {removed}: {e}")

        return True

    async def get_component_media_urls(self, component_id: str) -> Dict[str, Any]:
        try:
            return await self.pages.get_media_urls(component_id)
        except (BaseServiceError, SQLAlchemyError) as e:
            logger.error(f"Failed to read media URLs for {component_id}: {e}")
            return {}

    async def upload_and_set_component_media(
        self,
        data: bytes,
        filename: str,
        component_id: str,
        field: str,
        content_type: str = "application/octet-stream",
    ) -> Optional[str]:
        result = await self.upload_file(data, filename, component_id, field, content_type)
        if not result.success or not result.url:
            logger.error(f"Upload failed: {result.error}")
            return None

        if not await self.update_component_media_url(component_id, field, result.url):
            logger.error("Failed to update component with media URL")
            return None

        return result.url
