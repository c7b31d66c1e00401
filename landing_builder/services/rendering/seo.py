"""
SEO head data for a landing page.

Builds a plain dict the page template turns into meta tags (description,
keywords, canonical, Open Graph, Twitter card, robots) plus a JSON-LD WebPage block.
"""

from datetime import datetime, timezone
from typing import Dict, Any, Optional


def page_url(page: Any, deployed_url: Optional[str] = None) -> str:
    seo = page.seo_config or {}
    return deployed_url or seo.get("canonical") or f"https://{page.slug or 'landing-page'}.netlify.app"


def _iso(value: Optional[datetime]) -> str:
    return (value or datetime.now(timezone.utc)).isoformat()


def build_seo_context(page: Any, deployed_url: Optional[str] = None) -> Dict[str, Any]:
    seo = page.seo_config or {}
    theme = page.theme if hasattr(page, "theme") else (page.global_theme or {})
    title = seo.get("title") or page.slug
    description = seo.get("description") or ""
    og_image = seo.get("ogImage") or ""
    url = page_url(page, deployed_url)
    keywords = seo.get("keywords") or []
    if isinstance(keywords, str):
        keywords = [k.strip() for k in keywords.split(",") if k.strip()]

    return {
        "title": title,
        "description": description,
        "keywords": ", ".join(keywords),
        "canonical": seo.get("canonical") or deployed_url,
        "url": url,
        "og_image": og_image,
        "robots": "index, follow",
        "structured_data": {
            "@context": "https://schema.org",
            "@type": "WebPage",
            "name": title,
            "description": description,
            "url": url,
            "image": og_image,
            "inLanguage": theme.get("language") or page.language or "en",
            "datePublished": _iso(page.created_at),
            "dateModified": _iso(page.updated_at),
        },
    }
