"""
Render strategies: how a rendered page is packaged into deployable files.

One strategy per OutputFormat. Each returns a RenderedSite (path -> body) that
the deployment service hands to Netlify or zips for export.
"""

import json
import logging
from typing import Any, Dict, Optional, Type

from landing_builder.core.enums import OutputFormat
from landing_builder.schemas.deployment import RenderedSite
from .headers import generate_headers
from .page import PageRenderer

logger = logging.getLogger(__name__)

RUNTIME_SCRIPT = "assets/app.js"


class RenderStrategy:
    output_format: OutputFormat

    def __init__(self, renderer: Optional[PageRenderer] = None):
        self.renderer = renderer or PageRenderer()

    def build(self, page: Any, deployed_url: Optional[str] = None) -> RenderedSite:
        files = self.build_files(page, deployed_url)
        files["_headers"] = generate_headers()
        logger.debug(f"{self.output_format.value} strategy produced {sorted(files)}")
        return RenderedSite(output_format=self.output_format, files=files)

    def build_files(self, page: Any, deployed_url: Optional[str]) -> Dict[str, str]:
        raise NotImplementedError

    def runtime_script(self) -> str:
        return self.renderer.render_asset(RUNTIME_SCRIPT)


class HTMLStrategy(RenderStrategy):
    """Single self-contained index.html with CSS and runtime script inlined."""
    output_format = OutputFormat.HTML

    def build_files(self, page, deployed_url):
        rendered = self.renderer.render(page, deployed_url, inline_script=self.runtime_script())
        return {"index.html": self.renderer.tailwind.inline_css(rendered.html, rendered.css)}


class OptimizedStrategy(RenderStrategy):
    """index.html plus separately cacheable styles.css and app.js."""
    output_format = OutputFormat.OPTIMIZED

    def build_files(self, page, deployed_url):
        rendered = self.renderer.render(
            page, deployed_url, stylesheet_href="/styles.css", script_src="/app.js",
        )
        return {
            "index.html": rendered.html,
            "styles.css": rendered.css,
            "app.js": self.runtime_script(),
        }


class ReactProjectStrategy(RenderStrategy):
    """
    Prerendered site plus the Vite/React source it can be rebuilt from.

    The prerendered index.html and assets/ are servable as-is, so a digest deploy
    needs no build step; the src/ tree lets the merchant keep developing.
    """
    output_format = OutputFormat.REACT_PROJECT

    def build_files(self, page, deployed_url):
        rendered = self.renderer.render(
            page, deployed_url, stylesheet_href="/assets/styles.css", script_src="/assets/app.js",
        )
        page_data = self.renderer.page_data(page, rendered.sections)
        context = {"page": page, "project_name": page.slug or "landing-page"}
        return {
            "index.html": rendered.html,
            "assets/styles.css": rendered.css,
            "assets/app.js": self.runtime_script(),
            "package.json": self.renderer.render_asset("react/package.json", **context),
            "vite.config.js": self.renderer.render_asset("react/vite.config.js", **context),
            "netlify.toml": self.renderer.render_asset("react/netlify.toml", **context),
            "src/main.jsx": self.renderer.render_asset("react/main.jsx", **context),
            "src/App.jsx": self.renderer.render_asset("react/App.jsx", **context),
            "src/styles.css": rendered.css,
            "src/page-data.json": json.dumps(page_data, indent=2, ensure_ascii=False, default=str),
        }


STRATEGIES: Dict[OutputFormat, Type[RenderStrategy]] = {
    OutputFormat.HTML: HTMLStrategy,
    OutputFormat.OPTIMIZED: OptimizedStrategy,
    OutputFormat.REACT_PROJECT: ReactProjectStrategy,
}


def get_strategy(output_format: OutputFormat, renderer: Optional[PageRenderer] = None) -> RenderStrategy:
    return STRATEGIES[OutputFormat(output_format)](renderer)
