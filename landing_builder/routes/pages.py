"""
API routes for landing pages, their components and the variation catalog.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.core.exceptions import BaseServiceError
from landing_builder.dependencies import get_db, http_error
from landing_builder.schemas.component import ComponentUpdate, ComponentVariationRead, LandingPageComponentRead
from landing_builder.schemas.landing_page import LandingPageRead, LandingPageSummary
from landing_builder.services.landing_page_service import LandingPageService

router = APIRouter(prefix="/api", tags=["pages"])

logger = logging.getLogger(__name__)


@router.get("/pages", response_model=List[LandingPageSummary])
async def list_pages(
    status: Optional[str] = None,
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    pages = await LandingPageService(db).list_pages(status=status, limit=limit, offset=offset)
    return [LandingPageSummary.model_validate(page) for page in pages]


@router.get("/pages/{page_id}", response_model=LandingPageRead)
async def get_page(page_id: str, db: AsyncSession = Depends(get_db)):
    """Page with its ordered components and their variations"""
    try:
        page = await LandingPageService(db).get_page(page_id)
    except BaseServiceError as e:
        raise http_error(e)
    return LandingPageRead.model_validate(page)


@router.patch("/pages/{page_id}/components/{component_id}", response_model=LandingPageComponentRead)
async def update_component(
    page_id: str,
    component_id: str,
    data: ComponentUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Merge content, styles, visibility and button actions into one component"""
    try:
        component = await LandingPageService(db).update_component(page_id, component_id, data)
    except BaseServiceError as e:
        raise http_error(e)
    return LandingPageComponentRead.model_validate(component)


@router.get("/variations", response_model=List[ComponentVariationRead])
async def list_variations(component_type: Optional[str] = None, db: AsyncSession = Depends(get_db)):
    variations = await LandingPageService(db).list_variations(component_type)
    return [ComponentVariationRead.model_validate(v) for v in variations]
