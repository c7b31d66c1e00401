"""
Render a landing page to a complete HTML document with Jinja2.

Sections come from ``sections.build_section``; each is rendered through its
``templates/sections/<type>.html`` template and joined inside ``<main>``. The
document template adds theme (lang, dir, font) and SEO head tags. CSS is produced
separately by the Tailwind processor so strategies can inline it or ship a file.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, List, Optional, Dict

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape
from markupsafe import Markup

from landing_builder.core.exceptions import RenderError
from .sections import Section, build_section
from .seo import build_seo_context
from .tailwind import TailwindProcessor

logger = logging.getLogger(__name__)


@lru_cache()
def get_template_env() -> Environment:
    return Environment(
        loader=PackageLoader("landing_builder", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


@dataclass
class RenderedPage:
    html: str  # document without CSS
    css: str
    classes: List[str] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)


class PageRenderer:
    def __init__(self, env: Optional[Environment] = None, tailwind: Optional[TailwindProcessor] = None):
        self.env = env or get_template_env()
        self.tailwind = tailwind or TailwindProcessor()

    def build_sections(self, page: Any) -> List[Section]:
        components = sorted(page.components or [], key=lambda c: c.order_index or 0)
        return [build_section(component) for component in components]

    def render_section(self, section: Section) -> Markup:
        try:
            template = self.env.get_template(section.template_name)
            return Markup(template.render(s=section))
        except TemplateError as e:
            raise RenderError(f"Failed to render {section.component_type.value} section {section.id}: {e}")

    def render_asset(self, name: str, **context) -> str:
        """Render a non-HTML asset template (JS, JSON, config files)."""
        try:
            return self.env.get_template(name).render(**context)
        except TemplateError as e:
            raise RenderError(f"Failed to render asset {name}: {e}")

    def render(
        self,
        page: Any,
        deployed_url: Optional[str] = None,
        stylesheet_href: Optional[str] = None,
        script_src: Optional[str] = None,
        inline_script: Optional[str] = None,
        extra_head: Optional[str] = None,
    ) -> RenderedPage:
        """
        Render ``page`` to a document plus the CSS for the classes it uses.

        Args:
            page: LandingPage with components and variations loaded
            deployed_url: Public URL used for canonical/og:url
            stylesheet_href: Link an external stylesheet instead of leaving CSS to be inlined
            script_src: External runtime script
            inline_script: Runtime script body to embed

        Raises:
            RenderError: If a section or the document template fails
        """
        sections = self.build_sections(page)
        body = Markup("\n").join(self.render_section(section) for section in sections)
        theme = page.theme if hasattr(page, "theme") else (page.global_theme or {})

        try:
            html = self.env.get_template("page.html").render(
                page=page,
                theme=theme,
                seo=build_seo_context(page, deployed_url),
                body=body,
                stylesheet_href=stylesheet_href,
                script_src=script_src,
                inline_script=Markup(inline_script) if inline_script else None,
                extra_head=Markup(extra_head) if extra_head else None,
            )
        except TemplateError as e:
            raise RenderError(f"Failed to render page {page.id}: {e}")

        classes = self.tailwind.extract_classes(html)
        css = self.tailwind.generate_css(classes, theme)
        logger.info(f"Rendered page {page.id}: {len(sections)} sections, {len(classes)} classes")
        return RenderedPage(html=html, css=css, classes=classes, sections=sections)

    def page_data(self, page: Any, sections: List[Section]) -> Dict[str, Any]:
        """Serializable page description used by the React project export."""
        return {
            "id": str(page.id),
            "slug": page.slug,
            "theme": page.theme if hasattr(page, "theme") else (page.global_theme or {}),
            "seo": page.seo_config or {},
            "sections": [
                {
                    "id": s.id,
                    "type": s.component_type.value,
                    "variation": s.variation,
                    "content": s.content,
                    "styles": s.styles,
                    "visibility": s.visibility,
                    "mediaUrls": s.media_urls,
                    "actions": {k: vars(v) for k, v in s.actions.items()},
                }
                for s in sections
            ],
        }
