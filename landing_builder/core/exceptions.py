class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ConfigurationError(BaseServiceError):
    """Raised when a required API key, token or URL is not configured."""
    pass

class LandingPageNotFoundError(BaseServiceError):
    """Raised when a landing page is not found."""
    pass

class ComponentNotFoundError(BaseServiceError):
    """Raised when a landing page component is not found."""
    pass

class ValidationError(BaseServiceError):
    """Raised when data validation fails."""
    pass

class RenderError(BaseServiceError):
    """Raised when a page or section cannot be rendered."""
    pass

class DeploymentError(BaseServiceError):
    """Raised when a deployment step fails."""
    pass

class ImageConversionError(BaseServiceError):
    """Raised when an image cannot be decoded or re-encoded."""
    pass

class DatabaseError(Exception):
    """Exception raised for database-related errors."""
    pass

class PlatformServiceError(BaseServiceError):
    """Base exception for third-party platform errors."""
    pass

class NetlifyAPIError(PlatformServiceError):
    """Raised when Netlify API calls fail."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code

class StorageAPIError(PlatformServiceError):
    """Raised when Supabase storage calls fail."""
    pass

class AIGenerationError(PlatformServiceError):
    """Raised when the generative AI endpoint fails or returns garbage."""
    pass
