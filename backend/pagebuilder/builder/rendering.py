from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

from pagebuilder.utils.style_validation import safe_url, sanitize_css, sanitize_html

STYLE_PROPERTIES = {
    "backgroundColor": "background",
    "background": "background",
    "textColor": "color",
    "padding": "padding",
    "margin": "margin",
    "borderRadius": "border-radius",
}


def inline_style(style: Optional[Dict[str, Any]]) -> str:
    """Known style keys as a CSS declaration list, in a stable order."""
    declarations = []
    for key, prop in STYLE_PROPERTIES.items():
        value = (style or {}).get(key)
        if value not in (None, ""):
            declarations.append(f"{prop}:{value}")
    return ";".join(declarations)


def _safe_html(value, allow_js=False):
    return Markup(sanitize_html(value, allow_js=allow_js))


def _safe_css(value):
    return Markup(sanitize_css(value))


class TemplateRenderer:
    """Jinja2 environment holding one template per section type."""

    def __init__(self):
        self.env = Environment(loader=DictLoader({}), autoescape=select_autoescape(default=True))
        self.env.filters["inline_style"] = inline_style
        self.env.filters["safe_html"] = _safe_html
        self.env.filters["safe_css"] = _safe_css
        self.env.filters["safe_url"] = safe_url

    def add(self, name: str, source: str) -> None:
        self.env.loader.mapping[name] = source

    def render(self, name: str, **context: Any) -> str:
        return self.env.get_template(name).render(**context)


renderer = TemplateRenderer()


class TemplateUnit:
    """
    Render unit backed by a named template. Takes exactly
    ``config, style, edit_mode, section_id`` and returns HTML.
    """

    def __init__(self, name: str, source: str, renderer: TemplateRenderer = renderer):
        self.name = name
        self._renderer = renderer
        renderer.add(name, source)

    def __call__(self, *, config, style, edit_mode, section_id) -> str:
        return self._renderer.render(
            self.name,
            config=config,
            style=style,
            edit_mode=edit_mode,
            section_id=section_id,
        )

    def __repr__(self):
        return f"<TemplateUnit {self.name}>"
