"""
Schemas for component variations and the components placed on a page.
"""

from typing import Optional, List, Dict, Any
from pydantic import Field

from .base import BaseSchema


class ComponentVariationRead(BaseSchema):
    id: str
    component_type: str
    variation_name: str
    variation_number: int
    display_name: str
    description: Optional[str] = None
    available_parts: List[str] = Field(default_factory=list)
    default_content: Dict[str, Any] = Field(default_factory=dict)
    character_limits: Dict[str, Any] = Field(default_factory=dict)
    required_images: int = 0
    supports_video: bool = False
    layout_type: Optional[str] = None
    button_actions: Dict[str, Any] = Field(default_factory=dict)
    visibility_keys: Dict[str, Any] = Field(default_factory=dict)


class LandingPageComponentRead(BaseSchema):
    id: str
    page_id: str
    component_variation_id: str
    order_index: int
    content: Dict[str, Any] = Field(default_factory=dict)
    styles: Dict[str, Any] = Field(default_factory=dict)
    custom_styles: Dict[str, Any] = Field(default_factory=dict)
    visibility: Dict[str, Any] = Field(default_factory=dict)
    media_urls: Dict[str, Any] = Field(default_factory=dict)
    custom_actions: Dict[str, Any] = Field(default_factory=dict)
    variation: Optional[ComponentVariationRead] = None


class ComponentUpdate(BaseSchema):
    """PATCH body; keys present are merged into the stored maps"""
    content: Optional[Dict[str, Any]] = None
    styles: Optional[Dict[str, Any]] = None
    custom_styles: Optional[Dict[str, Any]] = None
    visibility: Optional[Dict[str, bool]] = None
    custom_actions: Optional[Dict[str, Any]] = None
    order_index: Optional[int] = None
