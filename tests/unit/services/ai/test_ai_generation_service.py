import pytest
from unittest.mock import AsyncMock, MagicMock

from landing_builder.core.enums import ComponentType, Tone, OptimizationGoal
from landing_builder.core.exceptions import AIGenerationError
from landing_builder.schemas.ai import AIGenerationRequest
from landing_builder.services.ai_generation_service import (
    AIGenerationService,
    NO_KEY_ERROR,
    default_content_for,
    extract_json_object,
    parse_text_fallback,
    to_component_content,
)

VARIATIONS = [
    {"id": "h1", "component_type": "hero", "variation_number": 1, "description": "Centered"},
    {"id": "h2", "component_type": "hero", "variation_number": 2, "description": "Split with features"},
    {"id": "c1", "component_type": "cta", "variation_number": 1, "description": "Banner"},
    {"id": "c3", "component_type": "cta", "variation_number": 3, "description": "With image"},
    {"id": "f1", "component_type": "features", "variation_number": 1, "description": "Grid"},
]


@pytest.fixture
def ai_client():
    client = MagicMock()
    client.complete = AsyncMock()
    client.generate_image = AsyncMock()
    return client


@pytest.fixture
def hero_request():
    return AIGenerationRequest(
        product_type="smart water bottle",
        target_audience="busy professionals",
        component_type=ComponentType.HERO,
        tone=Tone.FRIENDLY,
    )


"""
1. No API key
"""

@pytest.mark.asyncio
async def test_no_key_returns_error_without_request(settings, hero_request):
    service = AIGenerationService(settings)

    result = await service.generate_content(hero_request)
    image = await service.generate_image("a bottle")
    optimized = await service.optimize_content({"headline": "Hi"})

    for r in (result, image, optimized):
        assert r.error == NO_KEY_ERROR
        assert not r.ok
    assert result.value == default_content_for(ComponentType.HERO)
    assert image.value is None and optimized.value is None
    assert service._client is None


"""
2. Content generation
"""

@pytest.mark.asyncio
async def test_generate_content_parses_first_json_object(settings, ai_client, hero_request):
    ai_client.complete.return_value = (
        'Here you go:\n{"headline": "Hydrate Smarter", "subheadline": "Tracks every sip", "ctaText": "Buy Now"}\nEnjoy!'
    )
    service = AIGenerationService(settings, client=ai_client)

    result = await service.generate_content(hero_request)

    assert result.ok
    assert result.value == {"headline": "Hydrate Smarter", "subheadline": "Tracks every sip", "ctaButton": "Buy Now"}
    messages = ai_client.complete.call_args.args[0]
    assert messages[0]["role"] == "system"
    assert "smart water bottle" in messages[1]["content"]
    assert "friendly" in messages[1]["content"]
    assert ai_client.complete.call_args.kwargs == {"temperature": 0.7, "max_tokens": 2000}


@pytest.mark.asyncio
async def test_generate_content_falls_back_to_text_parsing(settings, ai_client, hero_request):
    ai_client.complete.return_value = "Hydrate Smarter\nTracks every sip you take"
    service = AIGenerationService(settings, client=ai_client)

    result = await service.generate_content(hero_request)

    assert result.value == {
        "headline": "Hydrate Smarter",
        "subheadline": "Tracks every sip you take",
        "ctaButton": "Get Started",
    }


@pytest.mark.asyncio
async def test_generated_features_use_template_keys(settings, ai_client):
    ai_client.complete.return_value = '{"title": "Why us", "features": [{"title": "Fast", "description": "Very"}]}'
    service = AIGenerationService(settings, client=ai_client)
    request = AIGenerationRequest(
        product_type="smart water bottle",
        target_audience="busy professionals",
        component_type=ComponentType.FEATURES,
    )

    result = await service.generate_content(request)

    assert result.value == {"sectionTitle": "Why us", "featureList": [{"title": "Fast", "description": "Very"}]}


@pytest.mark.asyncio
async def test_generation_errors_never_raise(settings, ai_client, hero_request):
    ai_client.complete.side_effect = AIGenerationError("AI API error: rate limited")
    ai_client.generate_image.side_effect = AIGenerationError("AI Image API error: boom")
    service = AIGenerationService(settings, client=ai_client)

    result = await service.generate_content(hero_request)
    image = await service.generate_image("a bottle")

    assert "rate limited" in result.error
    assert result.value == default_content_for(ComponentType.HERO)
    assert image.value is None and "boom" in image.error


@pytest.mark.asyncio
async def test_generate_image_adds_style(settings, ai_client):
    ai_client.generate_image.return_value = "https://img.example.com/1.png"
    service = AIGenerationService(settings, client=ai_client)

    result = await service.generate_image("a red bottle", "minimal")

    assert result.value == "https://img.example.com/1.png"
    ai_client.generate_image.assert_awaited_once_with("a red bottle, minimal style, high quality, professional")


@pytest.mark.asyncio
async def test_optimize_content(settings, ai_client):
    ai_client.complete.return_value = "Better copy"
    service = AIGenerationService(settings, client=ai_client)

    result = await service.optimize_content("Old copy", OptimizationGoal.CLARITY)

    assert result.value == "Better copy"
    prompt = ai_client.complete.call_args.args[0][1]["content"]
    assert prompt.startswith("Optimize this content for clarity:")
    assert ai_client.complete.call_args.kwargs == {"temperature": 0.5, "max_tokens": 1000}


@pytest.mark.asyncio
async def test_section_helpers_set_component_type(settings, ai_client):
    ai_client.complete.return_value = '{"faqItems": []}'
    service = AIGenerationService(settings, client=ai_client)

    await service.generate_faq_content("bottle", "runners")

    assert "frequently asked questions" in ai_client.complete.call_args.args[0][1]["content"]


"""
3. Variation selection
"""

@pytest.mark.asyncio
async def test_select_variations(settings, ai_client):
    ai_client.complete.return_value = '{"hero": "h2", "cta": "c3"}'
    service = AIGenerationService(settings, client=ai_client)

    selection = await service.select_component_variations("Bottle", "Smart bottle", VARIATIONS)

    assert (selection.hero, selection.cta) == (2, 3)
    assert (selection.hero_variation_id, selection.cta_variation_id) == ("h2", "c3")
    assert selection.used_fallback is False
    assert ai_client.complete.call_args.kwargs == {"temperature": 0.3, "max_tokens": 500}
    assert '"f1"' not in ai_client.complete.call_args.args[0][0]["content"]


@pytest.mark.asyncio
async def test_select_variations_rejects_unknown_ids(settings, ai_client):
    ai_client.complete.return_value = '{"hero": "c1", "cta": "zzz"}'
    service = AIGenerationService(settings, client=ai_client)

    selection = await service.select_component_variations("Bottle", "Smart bottle", VARIATIONS)

    assert selection.used_fallback is True
    assert selection.as_variation_numbers() == {"hero": 1, "cta": 1}
    assert "non-existent" in selection.error


@pytest.mark.asyncio
async def test_select_variations_without_key_falls_back(settings):
    selection = await AIGenerationService(settings).select_component_variations("Bottle", "", VARIATIONS)

    assert selection.used_fallback is True
    assert selection.error == NO_KEY_ERROR


"""
4. Parsing helpers
"""

def test_extract_json_object():
    assert extract_json_object('prefix {"a": 1} suffix') == {"a": 1}
    assert extract_json_object("no json here") is None
    assert extract_json_object("{not: valid}") is None


def test_parse_text_fallback_for_other_sections():
    assert parse_text_fallback("Some text", ComponentType.FAQ) == {"description": "Some text"}


def test_to_component_content_renames_keys():
    assert to_component_content(ComponentType.HERO, {"headline": "H", "ctaText": "Go"}) == {"headline": "H", "ctaButton": "Go"}
    assert to_component_content(ComponentType.FEATURES, {"title": "T", "features": [1]}) == {"sectionTitle": "T", "featureList": [1]}
    assert to_component_content(ComponentType.PRICING, {"pricingPlans": []}) == {"pricingCards": []}


def test_default_content_is_a_copy():
    content = default_content_for(ComponentType.HERO)
    content["headline"] = "Changed"
    assert default_content_for("hero")["headline"] == "Build Amazing Landing Pages"
