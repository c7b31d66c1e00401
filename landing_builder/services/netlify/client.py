import json
import hashlib
import logging
import httpx
from typing import Dict, List, Optional, Any, Union

from landing_builder.core.exceptions import ConfigurationError, NetlifyAPIError
from landing_builder.core.config import get_settings
from landing_builder.core.utils import unique_site_name
from landing_builder.schemas.deployment import NetlifySite, NetlifyDeployment

logger = logging.getLogger(__name__)


def file_sha1(content: Union[str, bytes]) -> str:
    """Hex SHA-1 of a file body, as Netlify's digest deploy expects."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha1(content).hexdigest()


class NetlifyClient:
    """
    Purpose: Asynchronous client for the Netlify REST API (v1).

    Functionality:
                - Site management: creating (create_site), listing (get_sites), renaming/attaching a
                    custom domain (update_site_domain) and deleting (delete_site).
                - Digest deploys (deploy_files): hashes every file with SHA-1, posts the path -> hash map,
                    then uploads only the files Netlify reports as ``required``.
                - Deploy state polling (get_deploy) and cancellation (cancel_deploy).
                - Base request logic (_make_request) with error handling (NetlifyAPIError).

    Documentation: https://open-api.netlify.com/
    """

    def __init__(self, access_token: Optional[str] = None, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """
        Initialize the Netlify client

        Args:
            access_token: Personal access token; defaults to NETLIFY_ACCESS_TOKEN
            base_url: API root; defaults to NETLIFY_API_URL
            timeout: Per-request timeout in seconds
        """
        settings = get_settings()
        self.access_token = access_token or settings.NETLIFY_ACCESS_TOKEN
        self.BASE_URL = (base_url or settings.NETLIFY_API_URL).rstrip("/")
        self.timeout = timeout or settings.HTTP_TIMEOUT

        if not self.access_token:
            raise ConfigurationError("Netlify access token is not configured")

    def _get_headers(self, content_type: str = "application/json") -> Dict[str, str]:
        """Get headers for API requests"""
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": content_type,
            "Accept": "application/json",
        }

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict] = None,
        params: Optional[Dict] = None,
        content: Optional[bytes] = None,
    ) -> Any:
        """
        Make a request to the Netlify API

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            endpoint: API endpoint (without base URL)
            data: JSON payload
            params: Query parameters
            content: Raw body; sent as application/octet-stream instead of JSON

        Returns:
            Parsed JSON response ({} for empty bodies)

        Raises:
            NetlifyAPIError: If the API request fails
        """
        url = f"{self.BASE_URL}/{endpoint.lstrip('/')}"
        headers = self._get_headers("application/octet-stream" if content is not None else "application/json")

        # Log the request details for debugging (but hide the auth token)
        masked_headers = headers.copy()
        masked_headers["Authorization"] = "Bearer [REDACTED]"
        logger.debug(f"Making {method} request to {url}")
        logger.debug(f"Headers: {masked_headers}")
        if params:
            logger.debug(f"Params: {params}")
        if data:
            logger.debug(f"Data: {json.dumps(data)[:500]}...")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=data if content is None else None,
                    content=content,
                    params=params,
                )

                if response.status_code not in (200, 201, 202, 204):
                    logger.error(f"Netlify API error ({response.status_code}): {response.text}")
                    raise NetlifyAPIError(
                        f"Netlify API error: {response.status_code} - {response.text}",
                        status_code=response.status_code,
                    )

                if response.status_code == 204 or not response.content:
                    return {}

                return response.json()

        except NetlifyAPIError:
            raise
        except httpx.TimeoutException as e:
            logger.error(f"Timeout error: {str(e)}")
            raise NetlifyAPIError(f"Request timed out: {str(e)}")
        except httpx.RequestError as e:
            logger.error(f"Network error: {str(e)}")
            raise NetlifyAPIError(f"Network error: {str(e)}")
        except ValueError as e:
            logger.error(f"Invalid JSON from Netlify: {str(e)}")
            raise NetlifyAPIError(f"Invalid response: {str(e)}")

    # Sites

    async def create_site(self, slug: Optional[str], custom_domain: Optional[str] = None) -> NetlifySite:
        """
        Create a site named from the page slug.

        Site names are global on Netlify, so the slug is sanitized and suffixed
        with a millisecond timestamp.
        """
        payload: Dict[str, Any] = {"name": unique_site_name(slug)}
        if custom_domain:
            payload["custom_domain"] = custom_domain

        logger.info(f"Creating Netlify site '{payload['name']}'")
        data = await self._make_request("POST", "/sites", data=payload)
        return NetlifySite.model_validate(data)

    async def get_sites(self) -> List[NetlifySite]:
        data = await self._make_request("GET", "/sites")
        return [NetlifySite.model_validate(site) for site in data or []]

    async def update_site_domain(self, site_id: str, custom_domain: Optional[str]) -> NetlifySite:
        data = await self._make_request("PATCH", f"/sites/{site_id}", data={"custom_domain": custom_domain})
        return NetlifySite.model_validate(data)

    async def delete_site(self, site_id: str) -> bool:
        logger.info(f"Deleting Netlify site {site_id}")
        await self._make_request("DELETE", f"/sites/{site_id}")
        return True

    # Deploys

    async def deploy_files(self, site_id: str, files: Dict[str, str]) -> NetlifyDeployment:
        """
        Digest deploy of an in-memory file set.

        Args:
            site_id: Target site
            files: Site-relative path -> file body

        Returns:
            NetlifyDeployment as returned by the create-deploy call

        Raises:
            NetlifyAPIError: If the deploy cannot be created or a required upload fails
        """
        bodies = {
            "/" + path.lstrip("/"): body.encode("utf-8") if isinstance(body, str) else body
            for path, body in files.items()
        }
        digest = {path: file_sha1(body) for path, body in bodies.items()}

        data = await self._make_request("POST", f"/sites/{site_id}/deploys", data={"files": digest})
        deployment = NetlifyDeployment.model_validate(data)
        logger.info(
            f"Created deploy {deployment.id} on site {site_id}: "
            f"{len(digest)} files, {len(deployment.required)} required"
        )

        required = set(deployment.required)
        for path, body in bodies.items():
            if digest[path] not in required:
                continue
            await self.upload_file(deployment.id, path, body)

        return deployment

    async def upload_file(self, deploy_id: str, path: str, body: bytes) -> Dict:
        logger.debug(f"Uploading {path} ({len(body)} bytes) to deploy {deploy_id}")
        return await self._make_request(
            "PUT",
            f"/deploys/{deploy_id}/files/{path.lstrip('/')}",
            content=body,
        )

    async def get_deploy(self, deploy_id: str) -> NetlifyDeployment:
        data = await self._make_request("GET", f"/deploys/{deploy_id}")
        return NetlifyDeployment.model_validate(data)

    async def cancel_deploy(self, deploy_id: str) -> NetlifyDeployment:
        data = await self._make_request("POST", f"/deploys/{deploy_id}/cancel")
        return NetlifyDeployment.model_validate(data)
