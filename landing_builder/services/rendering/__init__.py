from .page import PageRenderer, RenderedPage
from .sections import Section, build_section
from .strategies import RenderStrategy, get_strategy
from .tailwind import TailwindProcessor

__all__ = [
    "PageRenderer",
    "RenderedPage",
    "Section",
    "build_section",
    "RenderStrategy",
    "get_strategy",
    "TailwindProcessor",
]
