"""
Shared enums and constants used across the application.
"""

from enum import Enum


class ComponentType(str, Enum):
    HERO = "hero"
    FEATURES = "features"
    TESTIMONIALS = "testimonials"
    PRICING = "pricing"
    FAQ = "faq"
    CTA = "cta"


class PageStatus(str, Enum):
    """Landing page lifecycle values stored in landing_pages.status"""
    DRAFT = "draft"
    DEPLOYING = "deploying"
    PUBLISHED = "published"
    ERROR = "error"


class DeploymentJobStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DeployState(str, Enum):
    """Normalized hosting-provider deploy state"""
    PENDING = "pending"
    BUILDING = "building"
    READY = "ready"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (DeployState.READY, DeployState.ERROR)

    @classmethod
    def from_netlify(cls, state: str) -> "DeployState":
        """Collapse Netlify's many deploy states into the four we track."""
        state = (state or "").lower()
        if state in ("new", "enqueued", "pending_review", "accepted"):
            return cls.PENDING
        if state == "ready":
            return cls.READY
        if state in ("error", "rejected", "cancelled", "canceled"):
            return cls.ERROR
        return cls.BUILDING


class OutputFormat(str, Enum):
    """Rendering/packaging strategy used for a deployment"""
    HTML = "html"
    OPTIMIZED = "optimized"
    REACT_PROJECT = "react_project"


class TextDirection(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


class Language(str, Enum):
    EN = "en"
    FR = "fr"
    AR = "ar"


class Tone(str, Enum):
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    PERSUASIVE = "persuasive"
    FRIENDLY = "friendly"


class ImageStyle(str, Enum):
    REALISTIC = "realistic"
    ILLUSTRATION = "illustration"
    MINIMAL = "minimal"


class OptimizationGoal(str, Enum):
    CONVERSION = "conversion"
    ENGAGEMENT = "engagement"
    CLARITY = "clarity"


class ButtonActionType(str, Enum):
    MARKETPLACE_CHECKOUT = "marketplace_checkout"
    EXTERNAL_LINK = "external_link"
    SCROLL_TO = "scroll_to"
    MODAL = "modal"


class ImageFormat(str, Enum):
    WEBP = "webp"
    JPEG = "jpeg"
    PNG = "png"

    @property
    def extension(self) -> str:
        return "jpg" if self is ImageFormat.JPEG else self.value
