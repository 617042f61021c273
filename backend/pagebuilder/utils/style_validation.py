import logging
import re
from typing import Any, Dict, List

import bleach
from bleach.css_sanitizer import CSSSanitizer

logger = logging.getLogger(__name__)

COLOR_PATTERNS = [
    re.compile(r"^#[0-9A-Fa-f]{6}$"),
    re.compile(r"^#[0-9A-Fa-f]{3}$"),
    re.compile(r"^rgb\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*\)$"),
    re.compile(r"^rgba\(\s*\d+\s*,\s*\d+\s*,\s*\d+\s*,\s*[\d.]+\s*\)$"),
    re.compile(r"^[a-z]+$", re.IGNORECASE),
    re.compile(r"^linear-gradient\(", re.IGNORECASE),
    re.compile(r"^radial-gradient\(", re.IGNORECASE),
]

CSS_UNIT_PATTERN = re.compile(r"^\d+(\.\d+)?(px|rem|em|%|vh|vw|vmin|vmax|pt|cm|mm|in)?$")

DANGEROUS_PATTERNS = [
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"expression\(", re.IGNORECASE),
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"on\w+\s*=", re.IGNORECASE),
]

UNIT_PROPERTIES = {"padding", "margin", "width", "height", "fontSize"}


def is_valid_color(color: Any) -> bool:
    if not color or not isinstance(color, str):
        return False
    return any(pattern.match(color.strip()) for pattern in COLOR_PATTERNS)


def is_valid_css_unit(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return value == "auto" or bool(CSS_UNIT_PATTERN.match(value))


def is_safe_css_value(value: Any) -> bool:
    """False when the value carries script-like content."""
    if value is None or value == "":
        return True
    text = str(value)
    if any(pattern.search(text) for pattern in DANGEROUS_PATTERNS):
        logger.warning("Dangerous CSS value rejected: %r", text)
        return False
    return True


def _is_unit_list(value: str) -> bool:
    # Shorthands such as "2rem 0" or "1px 2px 3px 4px"
    parts = value.split()
    return bool(parts) and all(is_valid_css_unit(part) for part in parts)


def validate_style(style: Dict[str, Any]) -> List[str]:
    """
    Returns a list of problems; empty means the style object is acceptable.
    """
    errors: List[str] = []
    if not isinstance(style, dict):
        return errors

    for prop, value in style.items():
        if not is_safe_css_value(value):
            errors.append(f"Invalid CSS property: {prop}={value}")
            continue

        if not isinstance(value, str) or not value:
            continue

        if "color" in prop.lower() or prop == "background":
            if not is_valid_color(value):
                errors.append(f"Invalid color value: {prop}={value}")

        if prop in UNIT_PROPERTIES and not _is_unit_list(value):
            errors.append(f"Invalid CSS unit: {prop}={value}")

    return errors


# ------------------------
# Custom code
# ------------------------

ALLOWED_TAGS = [
    "div", "span", "section", "header", "footer", "nav", "main", "article", "aside",
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "strong", "em", "b", "i", "u", "small", "sup", "sub",
    "br", "hr", "blockquote", "pre", "code",
    "ul", "ol", "li",
    "table", "tr", "td", "th", "thead", "tbody",
    "img", "figure", "figcaption", "picture", "source",
    "a", "button", "label",
]

ALLOWED_ATTRIBUTES = {
    "*": ["class", "id", "style", "title", "role", "aria-label"],
    "a": ["href", "target", "rel"],
    "img": ["src", "alt", "width", "height", "srcset", "sizes", "loading"],
    "source": ["srcset", "sizes", "media", "type"],
    "td": ["colspan", "rowspan"],
    "th": ["colspan", "rowspan"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto", "tel"]

ALLOWED_CSS_PROPERTIES = [
    "color", "font-size", "font-weight", "font-family", "font-style",
    "text-align", "text-decoration", "text-transform", "line-height", "letter-spacing",
    "background", "background-color", "background-size", "background-position", "background-repeat",
    "margin", "margin-top", "margin-bottom", "margin-left", "margin-right",
    "padding", "padding-top", "padding-bottom", "padding-left", "padding-right",
    "border", "border-radius", "border-color", "border-width", "border-style",
    "width", "max-width", "min-width", "height", "max-height", "min-height",
    "display", "flex-direction", "justify-content", "align-items", "gap", "flex-wrap", "flex",
    "grid-template-columns", "grid-template-rows", "grid-gap",
    "overflow", "opacity", "box-shadow", "text-shadow", "object-fit",
    "list-style", "list-style-type",
]

CSS_SANITIZER = CSSSanitizer(allowed_css_properties=ALLOWED_CSS_PROPERTIES)

# Raw-text blocks whose body bleach would otherwise keep as text
_SCRIPT_BLOCK = re.compile(r"<\s*(script|style)\b.*?<\s*/\s*\1\s*>", re.IGNORECASE | re.DOTALL)

_STYLE_BREAKOUT = re.compile(r"<\s*/\s*style\b", re.IGNORECASE)
_HTML_TAG = re.compile(r"<[a-zA-Z!][^>]*>")
_CSS_AT_RULE = re.compile(r"@(import|charset)\b[^;]*;?", re.IGNORECASE)
_CSS_URL = re.compile(r"\burl\s*\(\s*(\"[^\"]*\"|'[^']*'|[^)]*)\s*\)", re.IGNORECASE)
_CSS_LEGACY_JS = re.compile(r"\bexpression\s*\(|-moz-binding\s*:|\bbehavior\s*:", re.IGNORECASE)

_URL_BREAKOUT = re.compile(r"[\"'()\\<>]")


def safe_url(value: Any, fallback: str = "#") -> str:
    """
    Relative URLs and the allowed protocols pass through; anything else,
    ``javascript:`` included, becomes ``fallback``.
    """
    if not value or not isinstance(value, str):
        return fallback

    # Browsers ignore control characters and whitespace inside the scheme
    url = "".join(ch for ch in value if ch.isprintable() and not ch.isspace())
    if not url or _URL_BREAKOUT.search(url):
        logger.warning("Unsafe URL rejected: %r", value)
        return fallback

    head = re.split(r"[/?#]", url, maxsplit=1)[0]
    if ":" in head and head.split(":", 1)[0].lower() not in ALLOWED_PROTOCOLS:
        logger.warning("Unsafe URL rejected: %r", value)
        return fallback
    return value.strip()


def _strip_css_url(match) -> str:
    target = match.group(1).strip("\"' ")
    if safe_url(target, fallback="") == "":
        return "none"
    return match.group(0)


def sanitize_css(css: Any) -> str:
    """Clean the body of a ``<style>`` block written in a custom-code section."""
    if not css or not isinstance(css, str):
        return ""

    if _STYLE_BREAKOUT.search(css) or _HTML_TAG.search(css):
        logger.warning("Custom CSS rejected: contains markup")
        return ""

    sanitized = _CSS_AT_RULE.sub("", css)
    sanitized = _CSS_URL.sub(_strip_css_url, sanitized)
    sanitized = _CSS_LEGACY_JS.sub("", sanitized)
    return sanitized.strip()


def sanitize_html(html: Any, allow_js: bool = False) -> str:
    if not html or not isinstance(html, str):
        return ""

    if allow_js:
        logger.info("Custom HTML rendered with JavaScript enabled")
        return html

    return bleach.clean(
        _SCRIPT_BLOCK.sub("", html),
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        css_sanitizer=CSS_SANITIZER,
        strip=True,
    )
