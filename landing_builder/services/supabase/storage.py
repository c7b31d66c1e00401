import logging
import httpx
from typing import Dict, List, Optional, Any

from landing_builder.core.exceptions import ConfigurationError, StorageAPIError
from landing_builder.core.config import get_settings

logger = logging.getLogger(__name__)


class SupabaseStorageClient:
    """
    Thin async client for the Supabase Storage REST API.

    Only the calls the media service needs are implemented: upsert upload,
    bulk remove and public URL construction.
    """

    def __init__(
        self,
        supabase_url: Optional[str] = None,
        service_key: Optional[str] = None,
        bucket: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        settings = get_settings()
        self.supabase_url = (supabase_url or settings.SUPABASE_URL).rstrip("/")
        self.service_key = service_key or settings.SUPABASE_SERVICE_ROLE_KEY
        self.bucket = bucket or settings.SUPABASE_STORAGE_BUCKET
        self.timeout = timeout or settings.HTTP_TIMEOUT

        if not self.supabase_url or not self.service_key:
            raise ConfigurationError("Supabase URL or service role key is not configured")

        self.BASE_URL = f"{self.supabase_url}/storage/v1"

    def _get_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }
        if extra:
            headers.update(extra)
        return headers

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Any] = None,
        content: Optional[bytes] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make a request to the storage API

        Raises:
            StorageAPIError: If the request fails
        """
        url = f"{self.BASE_URL}/{endpoint.lstrip('/')}"
        logger.debug(f"Making {method} request to {url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=self._get_headers(headers),
                    json=data,
                    content=content,
                )

                if response.status_code not in (200, 201, 204):
                    logger.error(f"Storage API error ({response.status_code}): {response.text}")
                    raise StorageAPIError(f"Storage request failed: {response.status_code} - {response.text}")

                if response.status_code == 204 or not response.content:
                    return {}
                return response.json()

        except StorageAPIError:
            raise
        except httpx.HTTPError as e:
            logger.error(f"Network error: {str(e)}")
            raise StorageAPIError(f"Network error: {str(e)}")

    async def upload(self, path: str, body: bytes, content_type: str = "application/octet-stream") -> str:
        """Upsert an object; returns its path inside the bucket."""
        await self._make_request(
            "POST",
            f"/object/{self.bucket}/{path}",
            content=body,
            headers={
                "Content-Type": content_type,
                "Cache-Control": "3600",
                "x-upsert": "true",
            },
        )
        return path

    async def remove(self, paths: List[str]) -> Any:
        return await self._make_request("DELETE", f"/object/{self.bucket}", data={"prefixes": paths})

    def public_url(self, path: str) -> str:
        return f"{self.BASE_URL}/object/public/{self.bucket}/{path}"

    def path_from_url(self, url: str) -> Optional[str]:
        """Object path for a public URL pointing into this bucket, else None."""
        marker = f"{self.bucket}/"
        if not url or marker not in url:
            return None
        return url.split(marker, 1)[1] or None
