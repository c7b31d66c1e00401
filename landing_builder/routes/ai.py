"""
API routes for generative AI copy, images and layout selection.

The service never raises; configuration and provider failures come back as
``AIResult.error`` with a 200 so the editor can show its static fallback copy.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from landing_builder.dependencies import get_db
from landing_builder.schemas.ai import (
    AIGenerationRequest,
    ImageGenerationRequest,
    OptimizeContentRequest,
    VariationSelectionRequest,
    AIResult,
    VariationSelection,
)
from landing_builder.services.ai_generation_service import AIGenerationService
from landing_builder.services.landing_page_service import LandingPageService

router = APIRouter(prefix="/api/ai", tags=["ai"])

logger = logging.getLogger(__name__)


def get_ai_service() -> AIGenerationService:
    return AIGenerationService()


@router.post("/content", response_model=AIResult)
async def generate_content(request: AIGenerationRequest, ai: AIGenerationService = Depends(get_ai_service)):
    return await ai.generate_content(request)


@router.post("/image", response_model=AIResult)
async def generate_image(request: ImageGenerationRequest, ai: AIGenerationService = Depends(get_ai_service)):
    return await ai.generate_image(request.prompt, request.style)


@router.post("/optimize", response_model=AIResult)
async def optimize_content(request: OptimizeContentRequest, ai: AIGenerationService = Depends(get_ai_service)):
    return await ai.optimize_content(request.content, request.goal)


@router.post("/select-variations", response_model=VariationSelection)
async def select_variations(
    request: VariationSelectionRequest,
    ai: AIGenerationService = Depends(get_ai_service),
    db: AsyncSession = Depends(get_db),
):
    """Pick hero and cta variations from the active catalog"""
    variations = await LandingPageService(db).list_variations()
    return await ai.select_component_variations(request.product_name, request.product_description, variations)
