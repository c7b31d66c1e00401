"""
Purpose: Database access for landing pages, their components, the variation catalog
and deployment job history.

Every other service goes through this one rather than querying the tables itself.
Pages and components are returned as ORM objects so the renderer can walk
``page.components`` -> ``component.variation`` without extra round trips.

JSONB maps are always replaced with a new dict on update so SQLAlchemy sees the change.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from landing_builder.core.enums import PageStatus, DeploymentJobStatus
from landing_builder.core.exceptions import LandingPageNotFoundError, ComponentNotFoundError
from landing_builder.core.utils import merge_dicts
from landing_builder.models.landing_page import LandingPage
from landing_builder.models.landing_page_component import LandingPageComponent
from landing_builder.models.component_variation import ComponentVariation
from landing_builder.models.deployment_job import DeploymentJob
from landing_builder.schemas.component import ComponentUpdate

logger = logging.getLogger(__name__)


class LandingPageService:
    def __init__(self, db: AsyncSession):
        self.db = db

    # Pages

    async def list_pages(self, status: Optional[str] = None, limit: int = 50, offset: int = 0) -> List[LandingPage]:
        query = select(LandingPage).order_by(LandingPage.updated_at.desc())
        if status:
            query = query.where(LandingPage.status == status)
        result = await self.db.execute(query.offset(offset).limit(limit))
        return list(result.scalars().all())

    async def get_page(self, page_id: str) -> LandingPage:
        """
        Load a page with its components (ordered by order_index) and their variations.

        Raises:
            LandingPageNotFoundError: If no page has this id
        """
        query = (
            select(LandingPage)
            .where(LandingPage.id == page_id)
            .options(
                selectinload(LandingPage.components).selectinload(LandingPageComponent.variation)
            )
        )
        result = await self.db.execute(query)
        page = result.scalars().first()
        if not page:
            raise LandingPageNotFoundError(f"Landing page {page_id} not found")
        return page

    async def set_status(self, page: LandingPage, status: PageStatus) -> LandingPage:
        page.status = status.value
        await self.db.commit()
        return page

    async def record_successful_deploy(
        self,
        page: LandingPage,
        site_id: str,
        url: Optional[str],
        custom_domain: Optional[str] = None,
    ) -> LandingPage:
        """Write all deployment metadata in one commit."""
        page.netlify_site_id = site_id
        page.deployed_url = url
        page.last_deployed_at = datetime.now(timezone.utc)
        page.status = PageStatus.PUBLISHED.value
        if custom_domain:
            page.custom_domain = custom_domain
        await self.db.commit()
        return page

    async def mark_deploy_failed(
        self,
        page_id: str,
        job_id: Optional[str],
        message: str,
        site_id: Optional[str] = None,
    ) -> None:
        """
        Flag the page and job as failed with UPDATE statements.

        Used after a rollback, when the loaded ORM objects are expired. Deployment
        metadata columns are not touched; a site created during the failed attempt
        is only remembered on the job.
        """
        await self.db.execute(
            update(LandingPage).where(LandingPage.id == page_id).values(status=PageStatus.ERROR.value)
        )
        if job_id:
            await self.db.execute(
                update(DeploymentJob)
                .where(DeploymentJob.id == job_id)
                .values(
                    status=DeploymentJobStatus.FAILED.value,
                    error_message=message,
                    site_id=site_id,
                    completed_at=datetime.now(timezone.utc),
                )
            )
        await self.db.commit()

    async def clear_deployment(self, page: LandingPage) -> LandingPage:
        page.netlify_site_id = None
        page.deployed_url = None
        page.status = PageStatus.DRAFT.value
        await self.db.commit()
        return page

    # Components

    async def get_component(self, component_id: str) -> LandingPageComponent:
        result = await self.db.execute(
            select(LandingPageComponent)
            .where(LandingPageComponent.id == component_id)
            .options(selectinload(LandingPageComponent.variation))
        )
        component = result.scalars().first()
        if not component:
            raise ComponentNotFoundError(f"Component {component_id} not found")
        return component

    async def update_component(self, page_id: str, component_id: str, data: ComponentUpdate) -> LandingPageComponent:
        component = await self.get_component(component_id)
        if component.page_id != page_id:
            raise ComponentNotFoundError(f"Component {component_id} does not belong to page {page_id}")

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field in ("content", "styles", "custom_styles", "visibility", "custom_actions"):
            if field in changes:
                setattr(component, field, merge_dicts(getattr(component, field), changes[field]))
        if "order_index" in changes:
            component.order_index = changes["order_index"]

        await self.db.commit()
        await self.db.refresh(component)
        logger.debug(f"Updated component {component_id}: {sorted(changes)}")
        return component

    async def get_media_urls(self, component_id: str) -> Dict[str, Any]:
        component = await self.get_component(component_id)
        return dict(component.media_urls or {})

    async def set_media_url(self, component_id: str, field: str, url: str) -> LandingPageComponent:
        component = await self.get_component(component_id)
        component.media_urls = {**(component.media_urls or {}), field: url}
        await self.db.commit()
        return component

    async def pop_media_url(self, component_id: str, field: str) -> Optional[str]:
        """Remove exactly one key from the media map; returns the removed URL."""
        component = await self.get_component(component_id)
        media_urls = dict(component.media_urls or {})
        removed = media_urls.pop(field, None)
        component.media_urls = media_urls
        await self.db.commit()
        return removed

    # Variation catalog

    async def list_variations(self, component_type: Optional[str] = None) -> List[ComponentVariation]:
        query = (
            select(ComponentVariation)
            .where(ComponentVariation.is_active.is_(True))
            .order_by(ComponentVariation.component_type, ComponentVariation.variation_number)
        )
        if component_type:
            query = query.where(ComponentVariation.component_type == component_type)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    # Deployment jobs

    async def create_job(
        self,
        page_id: str,
        output_format: str,
        job_data: Optional[Dict[str, Any]] = None,
        page: Optional[LandingPage] = None,
    ) -> DeploymentJob:
        """New in-progress job; also moves ``page`` to deploying in the same commit."""
        if page is not None:
            page.status = PageStatus.DEPLOYING.value
        job = DeploymentJob(
            id=str(uuid.uuid4()),
            landing_page_id=page_id,
            status=DeploymentJobStatus.IN_PROGRESS.value,
            output_format=output_format,
            job_data=job_data or {},
        )
        self.db.add(job)
        await self.db.commit()
        return job

    async def update_job(self, job: DeploymentJob, status: Optional[DeploymentJobStatus] = None, **fields) -> DeploymentJob:
        if status is not None:
            job.status = status.value
            if status in (DeploymentJobStatus.COMPLETED, DeploymentJobStatus.FAILED):
                job.completed_at = datetime.now(timezone.utc)
        for key, value in fields.items():
            setattr(job, key, value)
        await self.db.commit()
        return job

    async def list_jobs(self, page_id: str, limit: int = 20) -> List[DeploymentJob]:
        result = await self.db.execute(
            select(DeploymentJob)
            .where(DeploymentJob.landing_page_id == page_id)
            .order_by(DeploymentJob.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def latest_job(self, page_id: str) -> Optional[DeploymentJob]:
        jobs = await self.list_jobs(page_id, limit=1)
        return jobs[0] if jobs else None

    async def get_job_by_deploy_id(self, deploy_id: str) -> Optional[DeploymentJob]:
        result = await self.db.execute(select(DeploymentJob).where(DeploymentJob.deploy_id == deploy_id))
        return result.scalars().first()
