from typing import Any, Dict, List, Optional

from markupsafe import escape

from .registry import ComponentRegistry

DEFAULT_ICON = "🧩"

SEED_MARKUP: Dict[str, str] = {
    "header": (
        '<header class="component-header" data-component="header">'
        '<div class="navbar"><div class="navbar-brand"><h1>Real Estate</h1></div>'
        '<ul class="navbar-nav"><li><a href="#">Home</a></li><li><a href="#">Properties</a></li>'
        '<li><a href="#">About</a></li><li><a href="#">Contact</a></li></ul></div></header>'
    ),
    "hero": (
        '<section class="component-hero hero-large" data-component="hero" '
        'style="background:#004AAD;color:#fff;text-align:center;padding:4rem 1.5rem;">'
        '<div class="hero-content"><h1 class="hero-title">Homes that fit your lifestyle</h1>'
        '<p class="hero-subtitle">Premium curation with personal service.</p>'
        '<a class="hero-button" href="#">Book a visit</a></div></section>'
    ),
    "search-bar": (
        '<section class="component-search-bar" data-component="search-bar">'
        '<form data-role="search-form"><input type="text" data-field="term" placeholder="What are you looking for?">'
        '<input type="text" data-field="city" placeholder="City or neighbourhood">'
        '<button type="submit">Search properties</button></form></section>'
    ),
    "property-grid": (
        '<div data-component="property-grid" '
        'data-config=\'{"limit":6,"mode":"service","api":""}\' '
        'data-style=\'{"backgroundColor":"#ffffff","padding":"2rem"}\'>'
        '<h2>Featured properties</h2><div data-role="property-grid-list">'
        '<div class="component-placeholder"><strong>Property Grid</strong>'
        '<span>Dynamic component</span></div></div></div>'
    ),
    "stats-section": (
        '<section class="component-stats" data-component="stats-section"><div class="stats-container">'
        '<div class="stat-item"><span class="stat-value">1200+</span><span class="stat-label">Listings</span></div>'
        '<div class="stat-item"><span class="stat-value">98%</span><span class="stat-label">Satisfaction</span></div>'
        '<div class="stat-item"><span class="stat-value">12 years</span><span class="stat-label">Experience</span></div>'
        '</div></section>'
    ),
    "faq": (
        '<section data-component="faq" style="padding:2rem;max-width:900px;margin:0 auto;">'
        '<h2>Frequently asked questions</h2>'
        '<p><strong>How do I book a visit?</strong> Get in touch through the contact form.</p></section>'
    ),
    "newsletter": (
        '<section data-component="newsletter" style="padding:2rem;text-align:center;background:#f8fafc;">'
        '<h2>Get the news</h2><p>Sign up for new opportunities.</p>'
        '<input type="email" placeholder="Your email"></section>'
    ),
    "mortgage-calculator": (
        '<section data-component="mortgage-calculator" style="padding:2rem;background:#f9fafb;">'
        '<h2>Financing calculator</h2><p>Property value, down payment, rate and term.</p></section>'
    ),
    "divider": '<div class="component-divider" data-component="divider"><hr></div>',
    "spacer": '<div class="component-spacer" data-component="spacer" style="height:40px;"></div>',
    "custom-code": (
        '<section data-component="custom-code" style="padding:1.5rem;border:1px dashed #cbd5f5;">'
        '<h3>Custom Code</h3><p>Insert custom HTML/CSS.</p></section>'
    ),
    "footer": (
        '<footer class="component-footer" data-component="footer"><div class="footer-columns">'
        '<div class="footer-column"><h4>Company</h4><ul><li><a href="#">About</a></li>'
        '<li><a href="#">Contact</a></li></ul></div></div>'
        '<div class="footer-bottom">© 2026 Real Estate</div></footer>'
    ),
}


class BlockCatalogBuilder:
    """
    Seed markup for the external editor's block panel. Registered types
    get their seed (or one derived from their label); anything else gets
    a generic placeholder naming the type.
    """

    def __init__(self, registry: ComponentRegistry, seeds: Optional[Dict[str, str]] = None):
        self._registry = registry
        self._seeds = dict(SEED_MARKUP if seeds is None else seeds)

    def html_for_type(self, component_type: str) -> str:
        metadata = self._registry.get(component_type)
        if metadata is None:
            return self.fallback(component_type)

        seed = self._seeds.get(component_type)
        if seed:
            return seed

        return (
            f'<section class="component-{escape(component_type)}" data-component="{escape(component_type)}">'
            f"<h2>{escape(metadata.label)}</h2>"
            f"<p>{escape(metadata.description)}</p></section>"
        )

    def fallback(self, component_type: Any) -> str:
        name = escape(str(component_type or "unknown"))
        return (
            f'<section data-component="{name}" style="padding:1.5rem;border:1px dashed #cbd5f5;">'
            f"<h3>{name}</h3><p>Custom component.</p></section>"
        )

    def build(self) -> List[Dict[str, Any]]:
        blocks = []
        for metadata in self._registry.all_metadata():
            blocks.append({
                "id": metadata.type,
                "label": f"{metadata.icon or DEFAULT_ICON} {metadata.label}",
                "category": metadata.category or "content",
                "content": self.html_for_type(metadata.type),
            })
        return blocks

    def build_for(self, component_types: List[str]) -> List[Dict[str, Any]]:
        """Blocks for an explicit type list, including unregistered ones."""
        blocks = []
        for component_type in component_types:
            metadata = self._registry.get(component_type)
            label = metadata.label if metadata else component_type
            blocks.append({
                "id": component_type,
                "label": f"{(metadata.icon if metadata else '') or DEFAULT_ICON} {label}",
                "category": metadata.category if metadata else "custom",
                "content": self.html_for_type(component_type),
            })
        return blocks
