"""
Core module exports.
"""
from .enums import (
    ComponentType,
    PageStatus,
    DeploymentJobStatus,
    DeployState,
    OutputFormat,
)

from .exceptions import (
    BaseServiceError,
    ConfigurationError,
    LandingPageNotFoundError,
    ComponentNotFoundError,
    ValidationError,
    RenderError,
    DeploymentError,
    ImageConversionError,
    PlatformServiceError,
    NetlifyAPIError,
    StorageAPIError,
    AIGenerationError,
)

from .utils import (
    slugify_site_name,
    unique_site_name,
    merge_dicts,
)
