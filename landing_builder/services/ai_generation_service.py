"""
Purpose: Generate landing page copy, images and layout choices with an LLM.

Every public coroutine returns an AIResult (or VariationSelection) and never raises.
A missing API key is reported straight away without calling out.

Model output is expected to contain a JSON object; the first ``{...}`` block is parsed.
When that fails, a per-section text fallback builds something usable from the raw lines.
There is exactly one attempt per call; retries are left to the caller.
"""

import json
import logging
import re
from typing import Optional, Dict, Any, List, Sequence

from landing_builder.core.config import Settings, get_settings
from landing_builder.core.enums import ComponentType, Language, Tone, ImageStyle, OptimizationGoal
from landing_builder.core.exceptions import BaseServiceError, AIGenerationError
from landing_builder.schemas.ai import AIGenerationRequest, AIResult, VariationSelection
from landing_builder.services.ai.client import AIClient

logger = logging.getLogger(__name__)

NO_KEY_ERROR = "AI API key not configured"

COPYWRITER_SYSTEM_PROMPT = (
    "You are an expert copywriter specializing in landing pages. "
    "Generate compelling, conversion-focused content."
)
OPTIMIZER_SYSTEM_PROMPT = "You are an expert copywriter. Optimize content while maintaining the original message."

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_SECTION_INSTRUCTIONS = {
    ComponentType.HERO: (
        "Generate a compelling hero section with:\n"
        "- A powerful headline (max 60 characters)\n"
        "- A supporting subheadline (max 120 characters)\n"
        "- A clear call-to-action button text (max 25 characters)\n\n"
        'Format as JSON: {"headline": "", "subheadline": "", "ctaText": ""}'
    ),
    ComponentType.FEATURES: (
        "Generate a features section with:\n"
        "- A section title\n"
        "- 3-6 key features with titles and descriptions\n\n"
        'Format as JSON: {"title": "", "features": [{"title": "", "description": ""}]}'
    ),
    ComponentType.TESTIMONIALS: (
        "Generate 3 realistic testimonials with:\n"
        "- Customer name\n"
        "- Testimonial text (conversational, specific)\n"
        "- Customer role/title\n\n"
        'Format as JSON: {"testimonials": [{"name": "", "text": "", "role": ""}]}'
    ),
    ComponentType.FAQ: (
        "Generate 5-7 frequently asked questions with clear, helpful answers.\n\n"
        'Format as JSON: {"faqItems": [{"question": "", "answer": ""}]}'
    ),
    ComponentType.PRICING: (
        "Generate 3 pricing tiers (Basic, Pro, Enterprise) with:\n"
        "- Plan name\n"
        "- Price\n"
        "- 4-6 features per plan\n\n"
        'Format as JSON: {"pricingPlans": [{"name": "", "price": "", "features": []}]}'
    ),
    ComponentType.CTA: (
        "Generate a compelling call-to-action section with:\n"
        "- Urgent headline\n"
        "- Persuasive description\n"
        "- Action button text\n\n"
        'Format as JSON: {"headline": "", "description": "", "ctaText": ""}'
    ),
}

# Static copy used when generation is unavailable; keys match the section templates
DEFAULT_CONTENT: Dict[ComponentType, Dict[str, Any]] = {
    ComponentType.HERO: {
        "headline": "Build Amazing Landing Pages",
        "subheadline": "Create professional landing pages in minutes",
        "ctaButton": "Get Started Now",
    },
    ComponentType.FEATURES: {
        "sectionTitle": "Why Choose Us",
        "description": "Discover what makes us different",
        "featureList": [
            {"title": "Fast Performance", "description": "Lightning-fast loading times", "icon": "zap"},
        ],
    },
    ComponentType.TESTIMONIALS: {
        "sectionTitle": "What Our Customers Say",
        "testimonials": [{"name": "John Doe", "text": "Amazing product!", "rating": 5}],
    },
    ComponentType.PRICING: {
        "sectionTitle": "Choose Your Plan",
        "pricingCards": [
            {"name": "Basic", "price": "29", "features": ["Feature 1", "Feature 2"], "cta": "Get Started"},
        ],
    },
    ComponentType.FAQ: {
        "sectionTitle": "Frequently Asked Questions",
        "faqItems": [{"question": "How does it work?", "answer": "It works by..."}],
    },
    ComponentType.CTA: {
        "headline": "Ready to Get Started?",
        "description": "Join thousands of satisfied customers today",
        "ctaButton": "Start Now",
        "urgencyText": "Limited time offer!",
    },
}


def default_content_for(component_type: ComponentType) -> Dict[str, Any]:
    """A fresh copy of the fallback copy for a section type."""
    return json.loads(json.dumps(DEFAULT_CONTENT[ComponentType(component_type)]))


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the first {...} block in model output, or None."""
    match = _JSON_OBJECT.search(text or "")
    if not match:
        return None
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_text_fallback(text: str, component_type: ComponentType) -> Dict[str, Any]:
    lines = [line.strip() for line in (text or "").splitlines() if line.strip()]
    if ComponentType(component_type) is ComponentType.HERO:
        return {
            "headline": lines[0] if lines else "Generated Headline",
            "subheadline": lines[1] if len(lines) > 1 else "Generated Subheadline",
            "ctaText": "Get Started",
        }
    return {"description": text}


def to_component_content(component_type: ComponentType, generated: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rename generated keys to the section content keys the templates read.

    ctaText -> ctaButton, title -> sectionTitle, features -> featureList (features only),
    pricingPlans -> pricingCards. Unknown keys are kept.
    """
    component_type = ComponentType(component_type)
    content = dict(generated)
    if "ctaText" in content:
        content["ctaButton"] = content.pop("ctaText")
    if "title" in content and component_type is not ComponentType.HERO:
        content["sectionTitle"] = content.pop("title")
    if component_type is ComponentType.FEATURES and "features" in content:
        content["featureList"] = content.pop("features")
    if "pricingPlans" in content:
        content["pricingCards"] = content.pop("pricingPlans")
    return content


class AIGenerationService:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        api_key: Optional[str] = None,
        client: Optional[AIClient] = None,
    ):
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.AI_API_KEY
        self._client = client

    @property
    def client(self) -> AIClient:
        if self._client is None:
            self._client = AIClient(
                api_key=self.api_key,
                base_url=self.settings.AI_BASE_URL,
                text_model=self.settings.AI_TEXT_MODEL,
                image_model=self.settings.AI_IMAGE_MODEL,
            )
        return self._client

    @property
    def is_configured(self) -> bool:
        return bool(self._client is not None or self.api_key)

    def build_prompt(self, request: AIGenerationRequest) -> str:
        prompt = (
            f"Generate {request.component_type.value} content for a {request.product_type} "
            f"targeting {request.target_audience}.\n"
            f"Use a {request.tone.value} tone and write in {request.language.value}.\n"
        )
        if request.context:
            prompt += f"Additional context: {request.context}\n"
        return f"{prompt}\n{_SECTION_INSTRUCTIONS[request.component_type]}"

    async def generate_content(self, request: AIGenerationRequest) -> AIResult:
        """
        Section copy keyed the way the section templates read it.

        On failure the error comes back alongside the section's default copy.
        """
        if not self.is_configured:
            return AIResult(value=default_content_for(request.component_type), error=NO_KEY_ERROR)

        try:
            text = await self.client.complete(
                [
                    {"role": "system", "content": COPYWRITER_SYSTEM_PROMPT},
                    {"role": "user", "content": self.build_prompt(request)},
                ],
                temperature=0.7,
                max_tokens=2000,
            )
        except BaseServiceError as e:
            logger.error(f"Content generation failed for {request.component_type.value}: {e}")
            return AIResult(
                value=default_content_for(request.component_type),
                error=str(e) or "Failed to generate content",
            )

        parsed = extract_json_object(text)
        if parsed is None:
            logger.warning("Failed to parse AI content as JSON, using fallback parsing")
            parsed = parse_text_fallback(text, request.component_type)
        return AIResult(value=to_component_content(request.component_type, parsed))

    async def generate_image(self, prompt: str, style: ImageStyle = ImageStyle.REALISTIC) -> AIResult:
        if not self.is_configured:
            return AIResult(error=NO_KEY_ERROR)

        enhanced = f"{prompt}, {ImageStyle(style).value} style, high quality, professional"
        try:
            url = await self.client.generate_image(enhanced)
        except BaseServiceError as e:
            logger.error(f"Image generation failed: {e}")
            return AIResult(error=str(e) or "Failed to generate image")
        return AIResult(value=url)

    async def optimize_content(self, content: Any, goal: OptimizationGoal = OptimizationGoal.CONVERSION) -> AIResult:
        """Rewrite ``content`` (text or a content map) for the goal; returns the model's text."""
        if not self.is_configured:
            return AIResult(error=NO_KEY_ERROR)

        body = content if isinstance(content, str) else json.dumps(content, ensure_ascii=False, indent=2)
        prompt = f"Optimize this content for {OptimizationGoal(goal).value}:\n\n{body}\n\nProvide an improved version:"
        try:
            text = await self.client.complete(
                [
                    {"role": "system", "content": OPTIMIZER_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.5,
                max_tokens=1000,
            )
        except BaseServiceError as e:
            logger.error(f"Content optimization failed: {e}")
            return AIResult(error=str(e) or "Failed to optimize content")
        return AIResult(value=text)

    # Per-section helpers

    async def generate_hero_content(self, product_type: str, target_audience: str,
                                    language: Language = Language.EN, tone: Tone = Tone.PROFESSIONAL) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=tone, component_type=ComponentType.HERO,
        ))

    async def generate_features_content(self, product_type: str, target_audience: str,
                                        language: Language = Language.EN, context: Optional[str] = None) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=Tone.PROFESSIONAL, component_type=ComponentType.FEATURES, context=context,
        ))

    async def generate_testimonials_content(self, product_type: str, target_audience: str,
                                            language: Language = Language.EN) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=Tone.FRIENDLY, component_type=ComponentType.TESTIMONIALS,
        ))

    async def generate_faq_content(self, product_type: str, target_audience: str,
                                   language: Language = Language.EN) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=Tone.PROFESSIONAL, component_type=ComponentType.FAQ,
        ))

    async def generate_pricing_content(self, product_type: str, target_audience: str,
                                       language: Language = Language.EN) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=Tone.PERSUASIVE, component_type=ComponentType.PRICING,
        ))

    async def generate_cta_content(self, product_type: str, target_audience: str,
                                   language: Language = Language.EN) -> AIResult:
        return await self.generate_content(AIGenerationRequest(
            product_type=product_type, target_audience=target_audience,
            language=language, tone=Tone.PERSUASIVE, component_type=ComponentType.CTA,
        ))

    # Layout selection

    async def select_component_variations(
        self,
        product_name: str,
        product_description: str,
        variations: Sequence[Any] = (),
    ) -> VariationSelection:
        """
        Pick hero and cta variations for a product.

        ``variations`` are catalog rows (ORM objects or dicts) with id, component_type,
        variation_number and description. On any failure the first variation of each
        type is used and the result is flagged with ``used_fallback``.
        """
        if not self.is_configured:
            return self._fallback_selection(NO_KEY_ERROR)

        candidates = [_variation_summary(v) for v in variations]
        candidates = [c for c in candidates if c["component_type"] in (ComponentType.HERO.value, ComponentType.CTA.value)]
        if not candidates:
            return self._fallback_selection("No component variations found")

        prompt = (
            "You are a smart layout selector for a product landing page.\n\n"
            "Given the product name and description, and a list of possible variations for each section "
            "(hero, cta) with their IDs and short intent descriptions, select the best variation ID for each section.\n\n"
            'Only output a JSON object with keys "hero" and "cta" and their chosen variation IDs as values.\n'
            "Do NOT include any explanations or extra text.\n\n---\n\n"
            f'Product name: "{product_name}"\n\n'
            f"Product description: {product_description}\n\n"
            f"{json.dumps([{k: c[k] for k in ('id', 'component_type', 'description')} for c in candidates], indent=2)}\n\n---\n\n"
            'Output format example:\n{\n  "hero": "id",\n  "cta": "id"\n}'
        )

        try:
            text = await self.client.complete([{"role": "user", "content": prompt}], temperature=0.3, max_tokens=500)
            parsed = extract_json_object(text)
            if parsed is None:
                raise AIGenerationError("Failed to parse AI component selection response")

            by_id = {c["id"]: c for c in candidates}
            hero = by_id.get(str(parsed.get("hero")))
            cta = by_id.get(str(parsed.get("cta")))
            if not hero or hero["component_type"] != ComponentType.HERO.value \
                    or not cta or cta["component_type"] != ComponentType.CTA.value:
                raise AIGenerationError("AI selected non-existent component variations")
        except BaseServiceError as e:
            return self._fallback_selection(str(e))

        logger.info(f"Selected hero #{hero['variation_number']} and cta #{cta['variation_number']} for '{product_name}'")
        return VariationSelection(
            hero=hero["variation_number"],
            cta=cta["variation_number"],
            hero_variation_id=hero["id"],
            cta_variation_id=cta["id"],
        )

    def _fallback_selection(self, error: str) -> VariationSelection:
        logger.warning(f"Variation selection fell back to defaults: {error}")
        return VariationSelection(hero=1, cta=1, used_fallback=True, error=error)


def _variation_summary(variation: Any) -> Dict[str, Any]:
    get = variation.get if isinstance(variation, dict) else (lambda key, default=None: getattr(variation, key, default))
    component_type = get("component_type")
    return {
        "id": str(get("id")),
        "component_type": getattr(component_type, "value", component_type),
        "variation_number": get("variation_number", 1),
        "description": get("description") or f"{component_type} variation",
    }
