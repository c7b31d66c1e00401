"""
Schemas for landing pages, their theme and SEO settings.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
from pydantic import Field

from landing_builder.core.enums import TextDirection
from .base import BaseSchema, TimestampedSchema
from .component import LandingPageComponentRead


class ThemeConfig(BaseSchema):
    """Stored in landing_pages.global_theme with camelCase keys"""
    primary_color: str = Field("#3b82f6", alias="primaryColor")
    secondary_color: str = Field("#1f2937", alias="secondaryColor")
    background_color: str = Field("#ffffff", alias="backgroundColor")
    font_family: str = Field("Inter", alias="fontFamily")
    direction: TextDirection = TextDirection.LTR
    language: str = "en"


class SEOConfig(BaseSchema):
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    og_image: Optional[str] = Field(None, alias="ogImage")
    canonical: Optional[str] = None


class LandingPageSummary(TimestampedSchema):
    id: str
    product_id: Optional[str] = None
    slug: str
    status: str
    language: str = "en"
    deployed_url: Optional[str] = None
    last_deployed_at: Optional[datetime] = None


class LandingPageRead(LandingPageSummary):
    user_id: Optional[str] = None
    custom_domain: Optional[str] = None
    netlify_site_id: Optional[str] = None
    global_theme: Dict[str, Any] = Field(default_factory=dict)
    seo_config: Dict[str, Any] = Field(default_factory=dict)
    tracking_config: Dict[str, Any] = Field(default_factory=dict)
    components: List[LandingPageComponentRead] = Field(default_factory=list)
