"""
Request and result models for the generative AI endpoints.
"""

from typing import Optional, Dict, Any

from pydantic import BaseModel, Field

from landing_builder.core.enums import ComponentType, Language, Tone, ImageStyle, OptimizationGoal


class AIGenerationRequest(BaseModel):
    product_type: str
    target_audience: str
    language: Language = Language.EN
    tone: Tone = Tone.PROFESSIONAL
    component_type: ComponentType
    context: Optional[str] = None


class ImageGenerationRequest(BaseModel):
    prompt: str
    style: ImageStyle = ImageStyle.REALISTIC


class OptimizeContentRequest(BaseModel):
    content: Dict[str, Any]
    goal: OptimizationGoal = OptimizationGoal.CONVERSION


class VariationSelectionRequest(BaseModel):
    product_name: str
    product_description: str = ""


class AIResult(BaseModel):
    """Either a value or an error; AI calls never raise past the service"""
    value: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None


class VariationSelection(BaseModel):
    """Chosen hero and cta variations, by catalog number and (when known) id"""
    hero: int = 1
    cta: int = 1
    hero_variation_id: Optional[str] = None
    cta_variation_id: Optional[str] = None
    reasoning: Optional[str] = None
    used_fallback: bool = False
    error: Optional[str] = None

    def as_variation_numbers(self) -> Dict[str, int]:
        return {ComponentType.HERO.value: self.hero, ComponentType.CTA.value: self.cta}
