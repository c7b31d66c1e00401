"""
API routes for publishing landing pages.

Deploy and redeploy return the DeploymentResult as-is, including failures
(success=False with the error text); only a missing page is an HTTP error.
A successful upload schedules a background poll of the Netlify deploy so the
job row picks up its final build state.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.core.enums import OutputFormat
from landing_builder.core.exceptions import BaseServiceError
from landing_builder.dependencies import get_db, http_error
from landing_builder.schemas.deployment import (
    DeployRequest,
    DeploymentResult,
    DeploymentStatus,
    DeployStatusRead,
    DeploymentJobRead,
)
from landing_builder.services.deployment_monitor import watch_deploy
from landing_builder.services.deployment_service import DeploymentService

router = APIRouter(prefix="/api", tags=["deployments"])

logger = logging.getLogger(__name__)


@router.post("/pages/{page_id}/deploy", response_model=DeploymentResult)
async def deploy_page(
    page_id: str,
    background_tasks: BackgroundTasks,
    request: Optional[DeployRequest] = None,
    db: AsyncSession = Depends(get_db),
):
    request = request or DeployRequest()
    try:
        result = await DeploymentService(db).deploy_landing_page(page_id, request.output_format, request.custom_domain)
    except BaseServiceError as e:
        raise http_error(e)

    if result.success and result.deploy_id:
        background_tasks.add_task(watch_deploy, result.deploy_id)
    return result


@router.post("/pages/{page_id}/redeploy", response_model=DeploymentResult)
async def redeploy_page(
    page_id: str,
    background_tasks: BackgroundTasks,
    output_format: Optional[OutputFormat] = None,
    db: AsyncSession = Depends(get_db),
):
    try:
        result = await DeploymentService(db).redeploy(page_id, output_format)
    except BaseServiceError as e:
        raise http_error(e)

    if result.success and result.deploy_id:
        background_tasks.add_task(watch_deploy, result.deploy_id)
    return result


@router.delete("/pages/{page_id}/deployment", response_model=DeploymentResult)
async def undeploy_page(page_id: str, db: AsyncSession = Depends(get_db)):
    """Delete the Netlify site and return the page to draft"""
    try:
        return await DeploymentService(db).undeploy(page_id)
    except BaseServiceError as e:
        raise http_error(e)


@router.get("/pages/{page_id}/deployment", response_model=DeploymentStatus)
async def deployment_status(page_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await DeploymentService(db).get_deployment_status(page_id)
    except BaseServiceError as e:
        raise http_error(e)


@router.post("/pages/{page_id}/deployment/cancel", response_model=DeploymentStatus)
async def cancel_deployment(page_id: str, db: AsyncSession = Depends(get_db)):
    try:
        return await DeploymentService(db).cancel_deployment(page_id)
    except BaseServiceError as e:
        raise http_error(e)


@router.get("/pages/{page_id}/deployments", response_model=List[DeploymentJobRead])
async def list_deployments(
    page_id: str,
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await DeploymentService(db).list_deployments(page_id, limit)
    except BaseServiceError as e:
        raise http_error(e)


@router.get("/pages/{page_id}/preview", response_class=HTMLResponse)
async def preview_page(
    page_id: str,
    output_format: OutputFormat = OutputFormat.HTML,
    db: AsyncSession = Depends(get_db),
):
    """Rendered index.html without deploying"""
    try:
        site = await DeploymentService(db).preview(page_id, output_format)
    except BaseServiceError as e:
        raise http_error(e)
    return HTMLResponse(site.files["index.html"])


@router.get("/pages/{page_id}/export")
async def export_page(
    page_id: str,
    output_format: OutputFormat = OutputFormat.HTML,
    db: AsyncSession = Depends(get_db),
):
    """Rendered files plus a README as a zip download"""
    try:
        archive = await DeploymentService(db).export_zip(page_id, output_format)
    except BaseServiceError as e:
        raise http_error(e)
    return Response(
        content=archive,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="landing-page-{page_id}-{output_format.value}.zip"'},
    )


@router.get("/deploys/{deploy_id}", response_model=DeployStatusRead)
async def deploy_state(deploy_id: str, db: AsyncSession = Depends(get_db)):
    """Live Netlify state of one deploy"""
    try:
        return await DeploymentService(db).get_deploy_state(deploy_id)
    except BaseServiceError as e:
        raise http_error(e)
