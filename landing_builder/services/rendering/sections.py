"""
Turn stored components into render-ready sections.

A section merges the variation's default content with the merchant's overrides,
folds ``custom_styles`` over ``styles``, and resolves media and button bindings,
so the Jinja2 section templates only deal with plain values.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, List

from landing_builder.core.enums import ComponentType, ButtonActionType
from landing_builder.core.exceptions import RenderError

logger = logging.getLogger(__name__)

# Variation numbers each section template lays out; others render as variation 1
SUPPORTED_VARIATIONS: Dict[ComponentType, range] = {
    ComponentType.HERO: range(1, 7),
    ComponentType.FEATURES: range(1, 5),
    ComponentType.TESTIMONIALS: range(1, 3),
    ComponentType.PRICING: range(1, 2),
    ComponentType.FAQ: range(1, 2),
    ComponentType.CTA: range(1, 4),
}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")
_UNSAFE_CSS = re.compile(r"[;{}<>\"]")

# Older editor builds stored these action names
_LEGACY_ACTIONS = {
    "open_link": ButtonActionType.EXTERNAL_LINK,
    "link": ButtonActionType.EXTERNAL_LINK,
    "scroll": ButtonActionType.SCROLL_TO,
    "checkout": ButtonActionType.MARKETPLACE_CHECKOUT,
}


@dataclass
class ButtonLink:
    href: str = "#"
    action: Optional[str] = None
    target: Optional[str] = None
    tracking_event: Optional[str] = None
    modal_id: Optional[str] = None


def css_declarations(style: Optional[Dict[str, Any]]) -> str:
    """{"backgroundColor": "#fff"} -> "background-color:#fff"; unsafe values are dropped."""
    if not style:
        return ""
    parts = []
    for key, value in style.items():
        if value is None or value == "" or isinstance(value, (dict, list)):
            continue
        value = str(value)
        if _UNSAFE_CSS.search(value):
            logger.debug(f"Dropping unsafe style value for {key}")
            continue
        parts.append(f"{_CAMEL.sub('-', key).lower()}:{value}")
    return ";".join(parts)


def merge_content(defaults: Optional[Dict[str, Any]], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Overrides win key by key; a missing or null override keeps the default."""
    merged = dict(defaults or {})
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_action(binding: Optional[Dict[str, Any]]) -> ButtonLink:
    if not binding:
        return ButtonLink()

    raw_type = binding.get("action_type") or binding.get("type")
    try:
        action_type = _LEGACY_ACTIONS.get(raw_type) or ButtonActionType(raw_type)
    except ValueError:
        logger.warning(f"Unknown button action type: {raw_type}")
        return ButtonLink()

    tracking = binding.get("tracking_event")
    if action_type is ButtonActionType.EXTERNAL_LINK:
        url = str(binding.get("url") or "")
        if url and not re.match(r"^https?://", url, re.IGNORECASE):
            url = f"https://{url}"
        new_tab = binding.get("newTab", binding.get("new_tab", True))
        return ButtonLink(href=url or "#", action=action_type.value,
                          target="_blank" if new_tab else None, tracking_event=tracking)

    if action_type is ButtonActionType.SCROLL_TO:
        target_id = binding.get("target_id") or binding.get("targetId") or ""
        return ButtonLink(href=f"#{target_id}" if target_id else "#", action=action_type.value,
                          tracking_event=tracking)

    if action_type is ButtonActionType.MODAL:
        modal_id = binding.get("target_id") or binding.get("targetId")
        return ButtonLink(href="#", action=action_type.value, modal_id=modal_id, tracking_event=tracking)

    # marketplace checkout
    url = binding.get("url") or binding.get("fallback_url") or "#checkout"
    return ButtonLink(href=url, action=action_type.value, tracking_event=tracking)


@dataclass
class Section:
    id: str
    component_type: ComponentType
    variation: int
    layout_type: Optional[str] = None
    content: Dict[str, Any] = field(default_factory=dict)
    styles: Dict[str, Any] = field(default_factory=dict)
    visibility: Dict[str, Any] = field(default_factory=dict)
    media_urls: Dict[str, Any] = field(default_factory=dict)
    actions: Dict[str, ButtonLink] = field(default_factory=dict)

    @property
    def template_name(self) -> str:
        return f"sections/{self.component_type.value}.html"

    @property
    def anchor(self) -> str:
        return f"{self.component_type.value}-{self.id}"

    def visible(self, key: str) -> bool:
        """Parts are shown unless explicitly switched off."""
        return self.visibility.get(key, True) is not False

    def style(self, key: str) -> str:
        return css_declarations(self.styles.get(key))

    def media(self, key: str, fallback: Optional[str] = None) -> Optional[str]:
        return self.media_urls.get(key) or self.content.get(key) or fallback

    def action(self, key: str) -> ButtonLink:
        return self.actions.get(key) or ButtonLink()

    def get(self, key: str, default: Any = None) -> Any:
        return self.content.get(key, default)

    def items(self, key: str) -> List[Any]:
        value = self.content.get(key)
        return value if isinstance(value, list) else []


def warn_character_limits(section: Section, limits: Optional[Dict[str, Any]]) -> List[str]:
    """Log (never reject) text fields longer than their limit; returns the offending keys."""
    over = []
    for key, limit in (limits or {}).items():
        value = section.content.get(key)
        if isinstance(value, str) and isinstance(limit, int) and len(value) > limit:
            over.append(key)
            logger.warning(
                f"{section.component_type.value} section {section.id}: '{key}' is "
                f"{len(value)} characters (limit {limit})"
            )
    return over


def build_section(component: Any) -> Section:
    """
    Section for a LandingPageComponent with its variation loaded.

    Raises:
        RenderError: If the component has no variation or an unknown section type
    """
    variation = getattr(component, "variation", None)
    if variation is None:
        raise RenderError(f"Component {component.id} has no component variation")

    try:
        component_type = ComponentType(variation.component_type)
    except ValueError:
        raise RenderError(f"Unknown component type '{variation.component_type}' on component {component.id}")

    number = variation.variation_number or 1
    if number not in SUPPORTED_VARIATIONS[component_type]:
        logger.warning(f"No layout for {component_type.value} variation {number}; using variation 1")
        number = 1

    styles = dict(component.styles or {})
    for key, value in (component.custom_styles or {}).items():
        styles[key] = merge_content(styles.get(key), value) if isinstance(value, dict) else value

    bindings = merge_content(variation.button_actions, component.custom_actions)

    section = Section(
        id=str(component.id),
        component_type=component_type,
        variation=number,
        layout_type=variation.layout_type,
        content=merge_content(variation.default_content, component.content),
        styles=styles,
        visibility=dict(component.visibility or {}),
        media_urls=dict(component.media_urls or {}),
        actions={key: resolve_action(value) for key, value in bindings.items() if isinstance(value, dict)},
    )
    warn_character_limits(section, variation.character_limits)
    return section
