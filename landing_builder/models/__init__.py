from .product import Product, ProductMedia
from .landing_page import LandingPage, DEFAULT_THEME
from .component_variation import ComponentVariation
from .landing_page_component import LandingPageComponent
from .deployment_job import DeploymentJob

# This ensures all models are registered with SQLAlchemy
__all__ = [
    'Product',
    'ProductMedia',
    'LandingPage',
    'DEFAULT_THEME',
    'ComponentVariation',
    'LandingPageComponent',
    'DeploymentJob',
]
