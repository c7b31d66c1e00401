import pytest

from landing_builder.services.rendering.tailwind import TailwindProcessor, escape_class


@pytest.fixture
def processor():
    return TailwindProcessor()


def test_extract_classes_keeps_first_seen_order(processor):
    html = '<div class="p-4 flex"><span className="flex text-center p-4"></span></div>'

    assert processor.extract_classes(html) == ["p-4", "flex", "text-center"]


def test_css_for_known_and_unknown_classes(processor):
    assert processor.css_for_class("p-4") == ".p-4{padding:1rem}"
    assert processor.css_for_class("md:grid-cols-2") == ".md\\:grid-cols-2{grid-template-columns:repeat(2,minmax(0,1fr))}"
    assert processor.css_for_class("hover:opacity-90") == ".hover\\:opacity-90:hover{opacity:0.9}"
    assert processor.css_for_class("not-a-utility") is None
    assert processor.css_for_class("focus:p-4") is None


def test_space_y_targets_children(processor):
    assert processor.css_for_class("space-y-4").startswith(".space-y-4>:not([hidden])~:not([hidden]){")


def test_generate_css_groups_breakpoints(processor):
    css = processor.generate_css(["md:text-5xl", "p-4", "lg:grid-cols-3", "sm:flex"])

    assert ".p-4{" in css
    assert "@media (min-width:768px){.md\\:text-5xl{" in css
    assert css.index("min-width:640px") < css.index("min-width:768px") < css.index("min-width:1024px")
    assert css.index(".p-4{") < css.index("@media")


def test_theme_variables(processor):
    css = processor.theme_variables({"primaryColor": "#000", "fontFamily": "Open Sans"})

    assert "--primary-color:#000" in css
    assert "--secondary-color:#1f2937" in css
    assert '--font-family:"Open Sans"' in css


def test_process_html_inlines_after_head(processor):
    html = '<html><head><title>x</title></head><body class="p-4"></body></html>'

    result = processor.process_html(html)

    assert result.startswith("<html><head>\n<style>\n")
    assert ".p-4{padding:1rem}" in result
    assert result.index("</style>") < result.index("<title>")


def test_process_html_creates_head(processor):
    result = processor.process_html('<html><body class="flex"></body></html>')

    assert result.startswith("<html>\n<head>\n<style>")
    assert ".flex{display:flex}" in result


def test_header_element_is_not_mistaken_for_head(processor):
    result = processor.process_html('<html><body><header class="p-4">Top</header></body></html>')

    assert result.startswith("<html>\n<head>\n<style>")
    assert '<body><header class="p-4">Top</header></body>' in result
    assert result.index("</head>") < result.index("<header")


def test_head_with_attributes_is_reused(processor):
    result = processor.process_html('<html><head lang="en"><title>T</title></head><body class="flex"></body></html>')

    assert result.count("<head") == 1
    assert result.startswith('<html><head lang="en">\n<style>')


def test_escape_class():
    assert escape_class("md:w-1/2") == "md\\:w-1\\/2"
