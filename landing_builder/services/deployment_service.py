"""
Purpose: Publish landing pages to Netlify and track the result.

Role: Orchestrates the page service (data), the renderer (HTML/CSS/JS), the render
strategy for the requested OutputFormat (file packaging) and the Netlify client (upload).

Deploy steps, strictly in order:
    1. Load the page with its components and variations
    2. Render through the strategy for ``output_format``
    3. Create the Netlify site on first deploy (slug + timestamp)
    4. Digest-deploy the files
    5. Persist site id, URL, last_deployed_at and status='published' in one commit

A failure at any step stops the remaining ones. It is returned as
DeploymentResult(success=False, status='error'), never raised. The job is marked
failed and the page status becomes 'error'. The page's deployment metadata is
left exactly as it was.

Also provides redeploy, undeploy, preview (render only), zip export, stored
status, live deploy state, cancellation and job history.
"""

import io
import logging
import zipfile
from datetime import datetime, timezone
from typing import Optional, List

from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.core.config import Settings, get_settings
from landing_builder.core.enums import OutputFormat, PageStatus, DeployState, DeploymentJobStatus
from landing_builder.core.exceptions import NetlifyAPIError
from landing_builder.models.deployment_job import DeploymentJob
from landing_builder.models.landing_page import LandingPage
from landing_builder.schemas.deployment import (
    DeploymentResult,
    DeploymentStatus,
    DeployStatusRead,
    DeploymentJobRead,
    RenderedSite,
)
from landing_builder.services.landing_page_service import LandingPageService
from landing_builder.services.netlify.client import NetlifyClient
from landing_builder.services.rendering.page import PageRenderer
from landing_builder.services.rendering.strategies import get_strategy

logger = logging.getLogger(__name__)

README_TEMPLATE = """# {slug}

Exported from Landing Page Builder on {exported_at}.

Output format: `{output_format}`

## Files

{file_list}

## Deploying

Upload the folder to any static host. On Netlify, drag and drop it into the
dashboard or run `netlify deploy --dir . --prod`. The `_headers` file sets
security and cache headers on Netlify.
"""


class DeploymentService:
    def __init__(
        self,
        db: AsyncSession,
        settings: Optional[Settings] = None,
        netlify: Optional[NetlifyClient] = None,
        renderer: Optional[PageRenderer] = None,
    ):
        self.db = db
        self.settings = settings or get_settings()
        self.pages = LandingPageService(db)
        self.renderer = renderer or PageRenderer()
        self._netlify = netlify

    @property
    def netlify(self) -> NetlifyClient:
        if self._netlify is None:
            self._netlify = NetlifyClient(
                self.settings.NETLIFY_ACCESS_TOKEN,
                self.settings.NETLIFY_API_URL,
                self.settings.HTTP_TIMEOUT,
            )
        return self._netlify

    def render_site(self, page: LandingPage, output_format: OutputFormat, deployed_url: Optional[str] = None) -> RenderedSite:
        return get_strategy(output_format, self.renderer).build(page, deployed_url)

    async def deploy_landing_page(
        self,
        page_id: str,
        output_format: OutputFormat = OutputFormat.HTML,
        custom_domain: Optional[str] = None,
    ) -> DeploymentResult:
        """
        Render and publish a landing page.

        Args:
            page_id: Landing page to publish
            output_format: Render strategy to package the files with
            custom_domain: Attach this domain to the Netlify site

        Returns:
            DeploymentResult; on failure success=False with the error text

        Raises:
            LandingPageNotFoundError: If the page does not exist (nothing is recorded)
        """
        output_format = OutputFormat(output_format)
        page = await self.pages.get_page(page_id)
        logger.info(f"Deploying page {page_id} ('{page.slug}') as {output_format.value}")

        job = await self.pages.create_job(
            page_id,
            output_format.value,
            job_data={"custom_domain": custom_domain, "component_count": len(page.components or [])},
            page=page,
        )
        job_id = job.id
        created_site_id = None

        try:
            site = self.render_site(page, output_format, page.deployed_url)
            logger.info(f"Rendered {len(site.files)} files for page {page_id}: {site.paths}")

            site_id = page.netlify_site_id
            site_url = page.deployed_url
            if not site_id:
                created = await self.netlify.create_site(page.slug, custom_domain)
                site_id, site_url = created.id, created.public_url
                created_site_id = site_id
                logger.info(f"Created Netlify site {site_id} for page {page_id}")
            elif custom_domain and custom_domain != page.custom_domain:
                updated = await self.netlify.update_site_domain(site_id, custom_domain)
                site_url = updated.public_url or site_url

            deployment = await self.netlify.deploy_files(site_id, site.files)
            url = deployment.ssl_url or deployment.url or site_url or deployment.deploy_ssl_url
            logger.info(f"Uploaded deploy {deployment.id} to site {site_id}: {url}")

            job.status = DeploymentJobStatus.COMPLETED.value
            job.completed_at = datetime.now(timezone.utc)
            job.deploy_id = deployment.id
            job.site_id = site_id
            job.deploy_url = deployment.deploy_ssl_url or url
            job.provider_state = deployment.state
            await self.pages.record_successful_deploy(page, site_id, url, custom_domain)

        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.exception(f"Deployment of page {page_id} failed: {message}")
            await self.db.rollback()
            await self.pages.mark_deploy_failed(page_id, job_id, message, site_id=created_site_id)
            return DeploymentResult(
                success=False,
                status="error",
                error=message,
                job_id=job_id,
                output_format=output_format,
            )

        return DeploymentResult(
            success=True,
            status="success",
            url=url,
            site_id=site_id,
            deploy_id=deployment.id,
            job_id=job_id,
            output_format=output_format,
            files=site.paths,
        )

    async def redeploy(self, page_id: str, output_format: Optional[OutputFormat] = None) -> DeploymentResult:
        """Deploy again to the stored site, reusing the last output format unless one is given."""
        if output_format is None:
            last = await self.pages.latest_job(page_id)
            output_format = OutputFormat(last.output_format if last else self.settings.DEFAULT_OUTPUT_FORMAT)
        page = await self.pages.get_page(page_id)
        return await self.deploy_landing_page(page_id, output_format, page.custom_domain)

    async def undeploy(self, page_id: str) -> DeploymentResult:
        """Delete the Netlify site and clear the page's deployment metadata."""
        page = await self.pages.get_page(page_id)
        site_id = page.netlify_site_id
        if site_id:
            try:
                await self.netlify.delete_site(site_id)
            except NetlifyAPIError as e:
                if e.status_code != 404:
                    logger.error(f"Failed to delete site {site_id} for page {page_id}: {e}")
                    return DeploymentResult(success=False, status="error", error=str(e), site_id=site_id)
                logger.warning(f"Site {site_id} was already gone")

        await self.pages.clear_deployment(page)
        logger.info(f"Undeployed page {page_id} (site {site_id})")
        return DeploymentResult(success=True, status=PageStatus.DRAFT.value, site_id=site_id)

    async def preview(self, page_id: str, output_format: OutputFormat = OutputFormat.HTML) -> RenderedSite:
        page = await self.pages.get_page(page_id)
        return self.render_site(page, output_format, page.deployed_url)

    async def export_zip(self, page_id: str, output_format: OutputFormat = OutputFormat.HTML) -> bytes:
        """Rendered files plus a README, zipped in memory."""
        page = await self.pages.get_page(page_id)
        site = self.render_site(page, output_format, page.deployed_url)

        readme = README_TEMPLATE.format(
            slug=page.slug,
            exported_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            output_format=site.output_format.value,
            file_list="\n".join(f"- `{path}`" for path in site.paths),
        )

        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as archive:
            for path in site.paths:
                archive.writestr(path, site.files[path])
            archive.writestr("README.md", readme)
        logger.info(f"Exported page {page_id} as {output_format.value} zip ({len(site.files)} files)")
        return buf.getvalue()

    async def get_deployment_status(self, page_id: str) -> DeploymentStatus:
        page = await self.pages.get_page(page_id)
        job = await self.pages.latest_job(page_id)
        return self._status_for(page, job)

    async def get_deploy_state(self, deploy_id: str) -> DeployStatusRead:
        """
        Live state of one Netlify deploy, normalized to pending/building/ready/error.

        The matching local job (if any) gets the raw provider state; a deploy that
        ends in error also marks the job failed.

        Raises:
            NetlifyAPIError: If Netlify cannot be reached
        """
        deployment = await self.netlify.get_deploy(deploy_id)
        state = deployment.normalized_state

        job = await self.pages.get_job_by_deploy_id(deploy_id)
        if job is not None and job.provider_state != deployment.state:
            if state is DeployState.ERROR:
                await self.pages.update_job(
                    job, DeploymentJobStatus.FAILED,
                    provider_state=deployment.state,
                    error_message=deployment.error_message or f"Deploy {deployment.state}",
                )
            else:
                await self.pages.update_job(job, provider_state=deployment.state)

        return DeployStatusRead(
            deploy_id=deploy_id,
            state=state,
            provider_state=deployment.state,
            url=deployment.deploy_ssl_url or deployment.ssl_url or deployment.url,
            error_message=deployment.error_message,
        )

    async def cancel_deployment(self, page_id: str) -> DeploymentStatus:
        """
        Best-effort cancel of the page's latest deploy; the page always returns to draft.
        """
        page = await self.pages.get_page(page_id)
        job = await self.pages.latest_job(page_id)

        if job is not None and job.deploy_id:
            try:
                cancelled = await self.netlify.cancel_deploy(job.deploy_id)
                job.provider_state = cancelled.state
            except NetlifyAPIError as e:
                logger.warning(f"Could not cancel deploy {job.deploy_id}: {e}")
        if job is not None and job.status in (DeploymentJobStatus.PENDING.value, DeploymentJobStatus.IN_PROGRESS.value):
            job.status = DeploymentJobStatus.FAILED.value
            job.error_message = "Cancelled"
            job.completed_at = datetime.now(timezone.utc)

        page.status = PageStatus.DRAFT.value
        await self.db.commit()
        logger.info(f"Cancelled deployment for page {page_id}")
        return self._status_for(page, job)

    async def list_deployments(self, page_id: str, limit: int = 20) -> List[DeploymentJobRead]:
        await self.pages.get_page(page_id)
        jobs = await self.pages.list_jobs(page_id, limit)
        return [DeploymentJobRead.model_validate(job) for job in jobs]

    def _status_for(self, page: LandingPage, job: Optional[DeploymentJob]) -> DeploymentStatus:
        return DeploymentStatus(
            page_id=str(page.id),
            status=page.status,
            is_deployed=bool(page.netlify_site_id and page.deployed_url),
            netlify_site_id=page.netlify_site_id,
            deployed_url=page.deployed_url,
            custom_domain=page.custom_domain,
            last_deployed_at=page.last_deployed_at,
            latest_job=DeploymentJobRead.model_validate(job) if job is not None else None,
        )
