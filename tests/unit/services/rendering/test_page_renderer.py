import json
import re

import pytest

from landing_builder.core.enums import OutputFormat
from landing_builder.core.exceptions import RenderError
from landing_builder.services.rendering.headers import generate_headers
from landing_builder.services.rendering.page import PageRenderer
from landing_builder.services.rendering.seo import build_seo_context
from landing_builder.services.rendering.strategies import get_strategy
from tests.factories import make_component, make_page, make_variation


@pytest.fixture
def renderer():
    return PageRenderer()


"""
1. Document rendering
"""

def test_empty_page_renders_empty_main(renderer):
    rendered = renderer.render(make_page([]))

    assert re.search(r'<main id="main">\s*</main>', rendered.html)
    assert rendered.sections == []
    assert "<title>Super Widget</title>" in rendered.html


def test_sections_follow_order_index(renderer, hero_variation):
    cta = make_variation("cta", 1, default_content={"headline": "Ready?", "ctaButton": "Start Now"})
    page = make_page([make_component(cta, 1), make_component(hero_variation, 0)])

    html = renderer.render(page).html

    assert html.index('data-component="hero"') < html.index('data-component="cta"')


def test_content_overrides_defaults(renderer, sample_page):
    html = renderer.render(sample_page).html

    assert 'data-element="headline">Super Widget 3000</h1>' in html
    assert "Create professional landing pages in minutes" in html
    assert "Build Amazing Landing Pages" not in html


def test_content_is_escaped(renderer, hero_variation):
    page = make_page([make_component(hero_variation, 0, content={"headline": "<script>alert(1)</script>"})])

    html = renderer.render(page).html

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


def test_hidden_parts_are_not_rendered(renderer, hero_variation):
    page = make_page([make_component(hero_variation, 0, visibility={"subheadline": False})])

    html = renderer.render(page).html

    assert 'data-element="subheadline"' not in html
    assert 'data-element="headline"' in html


def test_button_action_becomes_link(renderer, hero_variation):
    page = make_page([make_component(
        hero_variation, 0,
        custom_actions={"ctaButton": {"action_type": "external_link", "url": "shop.example.com"}},
    )])

    html = renderer.render(page).html

    assert 'href="https://shop.example.com"' in html
    assert 'target="_blank"' in html


def test_unknown_variation_number_renders_first_layout(renderer):
    variation = make_variation("hero", 42, default_content={"headline": "Fallback"})

    rendered = renderer.render(make_page([make_component(variation, 0)]))

    assert rendered.sections[0].variation == 1
    assert 'data-variation="1"' in rendered.html


def test_unknown_component_type_raises(renderer):
    variation = make_variation("carousel", 1)

    with pytest.raises(RenderError, match="carousel"):
        renderer.render(make_page([make_component(variation, 0)]))


def test_css_covers_used_classes_and_theme(renderer, sample_page):
    rendered = renderer.render(sample_page)

    assert "py-20" in rendered.classes
    assert ".py-20{" in rendered.css
    assert "--primary-color:#ef4444" in rendered.css


"""
2. Strategies
"""

def test_html_strategy_inlines_everything(sample_page):
    site = get_strategy(OutputFormat.HTML).build(sample_page)

    assert site.paths == ["_headers", "index.html"]
    index = site.files["index.html"]
    assert "<style>" in index
    assert "<script>" in index
    assert 'rel="stylesheet" href="/styles.css"' not in index


def test_optimized_strategy_ships_assets(sample_page):
    site = get_strategy(OutputFormat.OPTIMIZED).build(sample_page)

    assert site.paths == ["_headers", "app.js", "index.html", "styles.css"]
    assert 'href="/styles.css"' in site.files["index.html"]
    assert 'src="/app.js"' in site.files["index.html"]
    assert "<style>" not in site.files["index.html"]


def test_react_strategy_file_set(sample_page):
    site = get_strategy(OutputFormat.REACT_PROJECT).build(sample_page)

    assert len(site.files) == 11
    assert {"index.html", "package.json", "src/App.jsx", "src/page-data.json", "_headers"} <= set(site.files)
    data = json.loads(site.files["src/page-data.json"])
    assert data["slug"] == "super-widget"
    assert [s["type"] for s in data["sections"]] == ["hero", "cta"]


"""
3. SEO and headers
"""

def test_seo_context(sample_page):
    seo = build_seo_context(sample_page, "https://super-widget.netlify.app")

    assert seo["title"] == "Super Widget"
    assert seo["keywords"] == "widget, gadget"
    assert seo["canonical"] == "https://super-widget.netlify.app"
    assert seo["structured_data"]["@type"] == "WebPage"
    assert seo["structured_data"]["datePublished"].startswith("2026-01-15")


def test_seo_defaults_without_config():
    seo = build_seo_context(make_page([], seo_config={}))

    assert seo["title"] == "super-widget"
    assert seo["canonical"] is None
    assert seo["url"] == "https://super-widget.netlify.app"


def test_headers_file():
    headers = generate_headers()

    assert headers.startswith("/*\n  X-Frame-Options: DENY")
    assert "/*.css\n  Cache-Control: public, max-age=31536000" in headers
    assert "/*.html\n  Cache-Control: no-cache" in headers
