"""
Minimal Tailwind post-processor.

Scans rendered HTML for utility classes and emits CSS for just those classes,
so the deployed page needs no Tailwind build step or CDN. Only the utilities
in UTILITY_CSS are known; anything else is skipped silently.
"""

import logging
import re
from typing import Dict, List, Optional, Any

logger = logging.getLogger(__name__)

CLASS_ATTR = re.compile(r'class(?:Name)?="([^"]*)"')
HEAD_TAG = re.compile(r"<head(?:\s[^>]*)?>", re.IGNORECASE)
HTML_TAG = re.compile(r"<html[^>]*>", re.IGNORECASE)

BREAKPOINTS = {
    "sm": "640px",
    "md": "768px",
    "lg": "1024px",
    "xl": "1280px",
    "2xl": "1536px",
}

PREFLIGHT = (
    "*,::before,::after{box-sizing:border-box;border-width:0;border-style:solid;border-color:#e5e7eb}\n"
    "::before,::after{--tw-content:''}\n"
    "html{line-height:1.5;-webkit-text-size-adjust:100%;font-family:ui-sans-serif,system-ui,-apple-system,"
    'BlinkMacSystemFont,"Segoe UI",Roboto,"Helvetica Neue",Arial,"Noto Sans",sans-serif}\n'
    "body{margin:0;line-height:inherit;font-family:var(--font-family),ui-sans-serif,system-ui,sans-serif;"
    "background-color:var(--background-color)}\n"
    "h1,h2,h3,h4,p,blockquote,figure{margin:0}\n"
    "img,video{display:block;max-width:100%;height:auto}\n"
    "a{color:inherit;text-decoration:inherit}\n"
    "button{font:inherit;cursor:pointer;background-color:transparent}\n"
    "ul,ol{list-style:none;margin:0;padding:0}\n"
    "details>summary{cursor:pointer}"
)

_SPACING = {
    "0": "0px", "1": "0.25rem", "2": "0.5rem", "3": "0.75rem", "4": "1rem", "5": "1.25rem",
    "6": "1.5rem", "8": "2rem", "10": "2.5rem", "12": "3rem", "16": "4rem", "20": "5rem", "24": "6rem",
}
_SPACING_PROPS = {
    "p": ("padding",), "px": ("padding-left", "padding-right"), "py": ("padding-top", "padding-bottom"),
    "pt": ("padding-top",), "pb": ("padding-bottom",), "pl": ("padding-left",), "pr": ("padding-right",),
    "m": ("margin",), "mx": ("margin-left", "margin-right"), "my": ("margin-top", "margin-bottom"),
    "mt": ("margin-top",), "mb": ("margin-bottom",), "ml": ("margin-left",), "mr": ("margin-right",),
    "gap": ("gap",),
}
_FONT_SIZES = {
    "xs": ("0.75rem", "1rem"), "sm": ("0.875rem", "1.25rem"), "base": ("1rem", "1.5rem"),
    "lg": ("1.125rem", "1.75rem"), "xl": ("1.25rem", "1.75rem"), "2xl": ("1.5rem", "2rem"),
    "3xl": ("1.875rem", "2.25rem"), "4xl": ("2.25rem", "2.5rem"), "5xl": ("3rem", "1"), "6xl": ("3.75rem", "1"),
}
_MAX_WIDTHS = {
    "sm": "24rem", "md": "28rem", "lg": "32rem", "xl": "36rem", "2xl": "42rem", "3xl": "48rem",
    "4xl": "56rem", "5xl": "64rem", "6xl": "72rem", "7xl": "80rem", "full": "100%",
}
_COLORS = {
    "white": "#fff", "black": "#000", "transparent": "transparent",
    "gray-50": "#f9fafb", "gray-100": "#f3f4f6", "gray-200": "#e5e7eb", "gray-300": "#d1d5db",
    "gray-400": "#9ca3af", "gray-500": "#6b7280", "gray-600": "#4b5563", "gray-700": "#374151",
    "gray-800": "#1f2937", "gray-900": "#111827",
    "blue-50": "#eff6ff", "blue-500": "#3b82f6", "blue-600": "#2563eb",
    "green-500": "#22c55e", "red-500": "#ef4444", "yellow-400": "#facc15",
    "primary": "var(--primary-color)", "secondary": "var(--secondary-color)",
}

UTILITY_CSS: Dict[str, str] = {
    # Display
    "block": "display:block", "inline-block": "display:inline-block", "inline-flex": "display:inline-flex",
    "flex": "display:flex", "grid": "display:grid", "hidden": "display:none",
    # Flex
    "flex-col": "flex-direction:column", "flex-row": "flex-direction:row", "flex-wrap": "flex-wrap:wrap",
    "flex-1": "flex:1 1 0%", "shrink-0": "flex-shrink:0",
    "items-start": "align-items:flex-start", "items-center": "align-items:center", "items-end": "align-items:flex-end",
    "justify-start": "justify-content:flex-start", "justify-center": "justify-content:center",
    "justify-end": "justify-content:flex-end", "justify-between": "justify-content:space-between",
    # Grid
    "grid-cols-1": "grid-template-columns:repeat(1,minmax(0,1fr))",
    "grid-cols-2": "grid-template-columns:repeat(2,minmax(0,1fr))",
    "grid-cols-3": "grid-template-columns:repeat(3,minmax(0,1fr))",
    "grid-cols-4": "grid-template-columns:repeat(4,minmax(0,1fr))",
    # Text
    "text-center": "text-align:center", "text-left": "text-align:left", "text-right": "text-align:right",
    "text-start": "text-align:start",
    "font-normal": "font-weight:400", "font-medium": "font-weight:500",
    "font-semibold": "font-weight:600", "font-bold": "font-weight:700", "font-extrabold": "font-weight:800",
    "italic": "font-style:italic", "uppercase": "text-transform:uppercase", "underline": "text-decoration-line:underline",
    "leading-tight": "line-height:1.25", "leading-relaxed": "line-height:1.625",
    "tracking-tight": "letter-spacing:-0.025em", "tracking-wide": "letter-spacing:0.025em",
    # Sizing
    "w-full": "width:100%", "h-full": "height:100%", "w-auto": "width:auto", "h-auto": "height:auto",
    "min-h-screen": "min-height:100vh", "mx-auto": "margin-left:auto;margin-right:auto",
    "w-12": "width:3rem", "h-12": "height:3rem", "w-16": "width:4rem", "h-16": "height:4rem",
    # Borders and effects
    "border": "border-width:1px", "border-2": "border-width:2px", "border-t": "border-top-width:1px",
    "rounded": "border-radius:0.25rem", "rounded-md": "border-radius:0.375rem", "rounded-lg": "border-radius:0.5rem",
    "rounded-xl": "border-radius:0.75rem", "rounded-2xl": "border-radius:1rem", "rounded-full": "border-radius:9999px",
    "shadow": "box-shadow:0 1px 3px 0 rgb(0 0 0/0.1),0 1px 2px -1px rgb(0 0 0/0.1)",
    "shadow-md": "box-shadow:0 4px 6px -1px rgb(0 0 0/0.1),0 2px 4px -2px rgb(0 0 0/0.1)",
    "shadow-lg": "box-shadow:0 10px 15px -3px rgb(0 0 0/0.1),0 4px 6px -4px rgb(0 0 0/0.1)",
    "opacity-75": "opacity:0.75", "opacity-90": "opacity:0.9",
    "overflow-hidden": "overflow:hidden", "object-cover": "object-fit:cover",
    "aspect-video": "aspect-ratio:16/9", "relative": "position:relative",
    "transition": "transition-property:color,background-color,border-color,opacity,box-shadow,transform;"
                  "transition-duration:150ms",
}
for _key, _value in _SPACING.items():
    for _prefix, _props in _SPACING_PROPS.items():
        UTILITY_CSS[f"{_prefix}-{_key}"] = ";".join(f"{prop}:{_value}" for prop in _props)
for _key, (_size, _line) in _FONT_SIZES.items():
    UTILITY_CSS[f"text-{_key}"] = f"font-size:{_size};line-height:{_line}"
for _key, _value in _MAX_WIDTHS.items():
    UTILITY_CSS[f"max-w-{_key}"] = f"max-width:{_value}"
for _key, _value in _COLORS.items():
    UTILITY_CSS[f"text-{_key}"] = f"color:{_value}"
    UTILITY_CSS[f"bg-{_key}"] = f"background-color:{_value}"
    UTILITY_CSS[f"border-{_key}"] = f"border-color:{_value}"

# Utilities whose rule targets children rather than the element itself
CHILD_SELECTORS = {f"space-y-{k}": ">:not([hidden])~:not([hidden])" for k in _SPACING}
for _key, _value in _SPACING.items():
    UTILITY_CSS[f"space-y-{_key}"] = f"margin-top:{_value}"


def escape_class(name: str) -> str:
    """Escape a class name for use in a CSS selector."""
    return re.sub(r"([:/.\[\]])", r"\\\1", name)


class TailwindProcessor:
    def extract_classes(self, html: str) -> List[str]:
        """Unique class names from class= and className= attributes, in first-seen order."""
        seen: Dict[str, None] = {}
        for match in CLASS_ATTR.finditer(html or ""):
            for cls in match.group(1).split():
                seen.setdefault(cls, None)
        return list(seen)

    def css_for_class(self, class_name: str) -> Optional[str]:
        """The rule for one class without any media wrapper, or None if unknown."""
        variant, _, base = class_name.rpartition(":")
        declarations = UTILITY_CSS.get(base)
        if declarations is None:
            return None

        selector = "." + escape_class(class_name)
        if variant == "hover":
            selector += ":hover"
        elif variant and variant not in BREAKPOINTS:
            return None
        selector += CHILD_SELECTORS.get(base, "")
        return f"{selector}{{{declarations}}}"

    def theme_variables(self, theme: Optional[Dict[str, Any]] = None) -> str:
        theme = theme or {}
        return (
            ":root{"
            f"--primary-color:{theme.get('primaryColor') or '#3b82f6'};"
            f"--secondary-color:{theme.get('secondaryColor') or '#1f2937'};"
            f"--background-color:{theme.get('backgroundColor') or '#ffffff'};"
            f"--font-family:{_font_stack(theme.get('fontFamily'))}"
            "}"
        )

    def generate_css(self, classes: List[str], theme: Optional[Dict[str, Any]] = None) -> str:
        """
        Preflight, theme variables and the rules for the given classes.

        Plain utilities keep their first-seen order; responsive variants are grouped
        into one media query per breakpoint, smallest first, so they always win.
        """
        base_rules: List[str] = []
        responsive: Dict[str, List[str]] = {bp: [] for bp in BREAKPOINTS}
        skipped = 0

        for cls in classes:
            rule = self.css_for_class(cls)
            if rule is None:
                skipped += 1
                continue
            variant = cls.rpartition(":")[0]
            if variant in BREAKPOINTS:
                responsive[variant].append(rule)
            else:
                base_rules.append(rule)

        parts = [PREFLIGHT, self.theme_variables(theme), *base_rules]
        for bp, rules in responsive.items():
            if rules:
                parts.append(f"@media (min-width:{BREAKPOINTS[bp]}){{{''.join(rules)}}}")

        logger.debug(f"Generated CSS for {len(classes) - skipped}/{len(classes)} classes")
        return "\n".join(parts)

    def inline_css(self, html: str, css: str) -> str:
        style = f"\n<style>\n{css}\n</style>"
        match = HEAD_TAG.search(html)
        if match:
            return html[:match.end()] + style + html[match.end():]

        head = f"<head>{style}\n</head>"
        match = HTML_TAG.search(html)
        if match:
            return html[:match.end()] + "\n" + head + html[match.end():]
        return head + "\n" + html

    def process_html(self, html: str, theme: Optional[Dict[str, Any]] = None) -> str:
        """Inline CSS for the classes ``html`` uses right after <head>, creating one if needed."""
        return self.inline_css(html, self.generate_css(self.extract_classes(html), theme))


def _font_stack(font_family: Optional[str]) -> str:
    if not font_family:
        return "Inter"
    return f'"{font_family}"' if " " in font_family else font_family
