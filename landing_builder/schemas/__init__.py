"""
Schema exports for the application.
"""

from .base import BaseSchema, TimestampedSchema
from .component import ComponentVariationRead, LandingPageComponentRead, ComponentUpdate
from .landing_page import ThemeConfig, SEOConfig, LandingPageSummary, LandingPageRead
from .deployment import (
    DeployRequest,
    DeploymentResult,
    DeploymentStatus,
    DeployStatusRead,
    DeploymentJobRead,
    NetlifySite,
    NetlifyDeployment,
    RenderedSite,
)
from .ai import (
    AIGenerationRequest,
    ImageGenerationRequest,
    OptimizeContentRequest,
    VariationSelectionRequest,
    AIResult,
    VariationSelection,
)
from .media import MediaUploadResult
