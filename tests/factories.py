"""Transient ORM objects for unit tests; nothing here touches a database."""
from datetime import datetime, timezone

from landing_builder.models import ComponentVariation, LandingPage, LandingPageComponent


def make_variation(component_type="hero", number=1, **overrides):
    fields = dict(
        id=f"var-{component_type}-{number}",
        component_type=component_type,
        variation_name=f"{component_type}-{number}",
        variation_number=number,
        display_name=f"{component_type.title()} {number}",
        description=f"{component_type} layout {number}",
        available_parts=[],
        default_content={},
        character_limits={},
        required_images=0,
        supports_video=False,
        layout_type="centered",
        button_actions={},
        visibility_keys={},
        is_active=True,
    )
    fields.update(overrides)
    return ComponentVariation(**fields)


def make_component(variation, order_index=0, **overrides):
    fields = dict(
        id=f"comp-{variation.component_type}-{order_index}",
        page_id="page-1",
        component_variation_id=variation.id,
        order_index=order_index,
        content={},
        styles={},
        custom_styles={},
        visibility={},
        media_urls={},
        custom_actions={},
    )
    fields.update(overrides)
    component = LandingPageComponent(**fields)
    component.variation = variation
    return component


def make_page(components=(), **overrides):
    now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    fields = dict(
        id="page-1",
        slug="super-widget",
        language="en",
        status="draft",
        custom_domain=None,
        netlify_site_id=None,
        deployed_url=None,
        last_deployed_at=None,
        global_theme={"primaryColor": "#ef4444"},
        seo_config={"title": "Super Widget", "description": "The best widget", "keywords": ["widget", "gadget"]},
        tracking_config={},
        created_at=now,
        updated_at=now,
    )
    fields.update(overrides)
    page = LandingPage(**fields)
    page.components = list(components)
    return page
